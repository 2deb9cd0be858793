"""Command-line entry point for the CI build-mode dispatcher.

Reads the CI flags from the environment once, runs the selected pipeline and
exits with its status.

Exit code behavior:
- 0 when the selected pipeline succeeds (tolerated steps may have failed)
- the failing command's exit status on a fatal step failure
- 127 when a required tool is missing
- 2 for usage errors and unknown schema names
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from buildmode.config import DISPATCH
from buildmode.dispatcher import dispatch
from buildmode.errors import BuildModeError, UnknownSchemaError
from buildmode.flags import FlagSet
from buildmode.schemas import SCHEMAS, list_schemas
from buildmode.tracing import init_tracing

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Select and run one CI build pipeline from environment flags",
    )
    parser.add_argument(
        "--schema",
        default=DISPATCH.SCHEMA,
        help=(
            f"Configuration generation (default: {DISPATCH.SCHEMA}; known: {', '.join(list_schemas())}). "
            "v1 runs build --all, test --all --tests, build --benches --all when no mode flag is set"
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the selected pipeline and exit without running it",
    )
    parser.add_argument(
        "--list-schemas",
        action="store_true",
        help="List configuration generations and exit",
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        default=None,
        help="Repository root to run commands in (default: current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=DISPATCH.LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    if args.list_schemas:
        for name in list_schemas():
            generation = SCHEMAS[name]
            print(f"{name}: {generation.description} (mode flags: {', '.join(generation.flags)})")
        return 0

    workdir = args.workdir.expanduser().resolve() if args.workdir is not None else None
    if workdir is not None and not workdir.is_dir():
        logger.error(f"Working directory does not exist: {workdir}")
        return 2

    flags = FlagSet.from_environ()

    try:
        if args.dry_run:
            pipeline = dispatch(flags, schema=args.schema, dry_run=True).pipeline
            print(f"# mode: {pipeline.mode.value} (schema {pipeline.schema})")
            for line in pipeline.describe():
                print(line)
            return 0

        init_tracing()
        result = dispatch(flags, schema=args.schema, workdir=workdir)
    except UnknownSchemaError as e:
        logger.error(str(e))
        return 2
    except BuildModeError as e:
        logger.error(str(e))
        return e.exit_status

    return result.exit_status


if __name__ == "__main__":
    raise SystemExit(main())
