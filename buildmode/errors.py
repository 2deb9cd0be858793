"""Dispatcher errors.

Configuration ambiguity (several mode flags set at once) is not represented
here: it is resolved by priority order and never raised.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from buildmode.pipeline.commands import Command


class BuildModeError(RuntimeError):
    """Base class for fatal dispatcher failures."""

    exit_status: int = 1


class MissingToolError(BuildModeError):
    """Raised when an external program cannot be found or executed."""

    exit_status = 127

    def __init__(self, program: str, command: Optional["Command"] = None):
        self.program = program
        self.command = command
        super().__init__(f"Required tool not found: {program}")


class CommandFailedError(BuildModeError):
    """Raised when a non-tolerated step exits nonzero."""

    def __init__(self, command: "Command", exit_status: int):
        self.command = command
        self.exit_status = int(exit_status)
        super().__init__(f"Command failed with exit status {self.exit_status}: {command.display()}")


class UnrecognizedModeError(BuildModeError):
    """Raised when a schema selects a mode it declares no pipeline for."""

    def __init__(self, mode: str, schema: str):
        self.mode = mode
        self.schema = schema
        super().__init__(f"Schema '{schema}' has no pipeline for mode '{mode}'")


class UnknownSchemaError(ValueError):
    """Raised for an unknown configuration generation name."""

    def __init__(self, name: str, known: List[str]):
        self.name = name
        self.known = list(known)
        super().__init__(f"Unknown schema '{name}' (known: {', '.join(self.known)})")
