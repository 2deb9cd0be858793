"""
Centralized Configuration
=========================
Centralized configuration values and constants for the buildmode CI dispatcher.

This module provides:
- External tool program names
- Dispatcher defaults (configuration generation, log level)
- Tracing settings

The CI mode flags themselves are not read here. They are captured once into a
FlagSet by the entry point and passed explicitly to the dispatcher.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ToolConfig:
    """Program names for the external collaborators."""

    # Package build/test tool (clippy, doc, tarpaulin and fmt are sub-commands)
    CARGO: str = os.getenv("BUILDMODE_CARGO", "cargo")

    # Secondary documentation renderer
    MDBOOK: str = os.getenv("BUILDMODE_MDBOOK", "mdbook")

    # Documentation upload utility
    TRAVIS_CARGO: str = os.getenv("BUILDMODE_TRAVIS_CARGO", "travis-cargo")

    # Directory copy
    COPY: str = os.getenv("BUILDMODE_COPY", "cp")

    def program_for(self, role: str) -> str:
        """Resolve a symbolic tool role to a program name.

        Args:
            role: One of 'build-tool', 'book-tool', 'upload-tool', 'copy-tool'

        Returns:
            Program name or path

        Raises:
            KeyError: For an unknown role
        """
        mapping = {
            "build-tool": self.CARGO,
            "book-tool": self.MDBOOK,
            "upload-tool": self.TRAVIS_CARGO,
            "copy-tool": self.COPY,
        }
        return mapping[role]


@dataclass(frozen=True)
class DispatchConfig:
    """Dispatcher defaults."""

    # Configuration generation used when --schema is not given
    SCHEMA: str = os.getenv("BUILDMODE_SCHEMA", "v2")

    LOG_LEVEL: str = os.getenv("BUILDMODE_LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class TracingConfig:
    """Tracing configuration."""

    SERVICE_NAME: str = "buildmode-ci"
    OTLP_ENDPOINT: str = os.getenv("OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
    ENABLED: bool = os.getenv("ENABLE_TRACING", "false").lower() == "true"


# Global singleton instances
TOOLS = ToolConfig()
DISPATCH = DispatchConfig()
TRACING = TracingConfig()
