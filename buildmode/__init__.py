"""
buildmode
=========
CI build-mode dispatcher: select one build/verification pipeline from
environment flags and run it with fail-fast semantics.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from .dispatcher import Pipeline, PipelineResult, build_pipeline, dispatch, select_mode
from .errors import (
    BuildModeError,
    CommandFailedError,
    MissingToolError,
    UnknownSchemaError,
    UnrecognizedModeError,
)
from .flags import FlagSet
from .schemas import Mode, SchemaGeneration, get_schema, list_schemas

__all__ = [
    # Dispatch
    "Pipeline",
    "PipelineResult",
    "build_pipeline",
    "dispatch",
    "select_mode",
    # Inputs and configuration generations
    "FlagSet",
    "Mode",
    "SchemaGeneration",
    "get_schema",
    "list_schemas",
    # Errors
    "BuildModeError",
    "CommandFailedError",
    "MissingToolError",
    "UnknownSchemaError",
    "UnrecognizedModeError",
]
