#!/usr/bin/env python3
"""Run the CI build mode selected by the environment flags.

Drop-in replacement for a `ci/script.sh` step:

    CLIPPY=yes python scripts/ci_build.py
    DOCS=yes HTML_REPORTS=no python scripts/ci_build.py --schema v1
    python scripts/ci_build.py --dry-run

The default generation is v2 (release builds). With no mode flag set, v1
runs build --all, test --all --tests, build --benches --all:

    python scripts/ci_build.py --schema v1
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    # Allow running this script directly without requiring installation.
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    from buildmode.cli import main as cli_main

    return cli_main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
