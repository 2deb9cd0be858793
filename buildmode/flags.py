"""
CI Flags
========
Immutable view of the environment toggles that drive mode selection.

The process environment is read exactly once (FlagSet.from_environ) and the
resulting value is passed explicitly to the dispatcher. Absent keys read as
the empty string.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional, Tuple


NO_DEFAULT_FEATURES = "--no-default-features"


@dataclass(frozen=True)
class FlagSet:
    """Recognised CI flags, keyed by their environment variable names."""

    HTML_REPORTS: str = ""
    CLIPPY: str = ""
    DOCS: str = ""
    COVERAGE: str = ""
    BENCHMARK: str = ""
    RUSTFMT: str = ""
    TRAVIS_JOB_ID: str = ""
    TRAVIS_RUST_VERSION: str = ""

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "FlagSet":
        """Capture the recognised flags from an environment mapping.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            FlagSet with absent keys set to ""
        """
        env = os.environ if environ is None else environ
        values: Dict[str, str] = {}
        for name in cls.names():
            value = env.get(name)
            values[name] = value if isinstance(value, str) else ""
        return cls(**values)

    def get(self, name: str) -> str:
        """Return a flag value; unknown names read as ""."""
        if name not in self.names():
            return ""
        return getattr(self, name)

    def is_yes(self, name: str) -> bool:
        return self.get(name) == "yes"

    @property
    def build_args(self) -> Tuple[str, ...]:
        """Extra build tokens derived from HTML_REPORTS."""
        if self.HTML_REPORTS == "no":
            return (NO_DEFAULT_FEATURES,)
        return ()

    @property
    def is_stable_toolchain(self) -> bool:
        return self.TRAVIS_RUST_VERSION == "stable"

    def to_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.names()}
