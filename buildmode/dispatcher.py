"""
Mode Dispatcher
===============
Map a FlagSet to exactly one pipeline and run it.

Selection walks the schema's mode rules in order and stops at the first flag
equal to "yes"; when none matches the default pipeline runs. Several flags
set at once are resolved by that order and never treated as an error.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from loguru import logger

from buildmode.config import DISPATCH, TOOLS, ToolConfig
from buildmode.errors import UnrecognizedModeError
from buildmode.flags import FlagSet
from buildmode.pipeline.commands import Command, expand_step
from buildmode.pipeline.executor import StepResult, run_pipeline
from buildmode.schemas import Mode, SchemaGeneration, get_schema


SchemaRef = Union[str, SchemaGeneration, None]


@dataclass(frozen=True)
class Pipeline:
    """The selected mode and its concrete commands."""

    mode: Mode
    schema: str
    commands: Tuple[Command, ...]

    def describe(self) -> List[str]:
        return [command.display() for command in self.commands]


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a successful (or dry) dispatch."""

    pipeline: Pipeline
    steps: List[StepResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def mode(self) -> Mode:
        return self.pipeline.mode

    @property
    def exit_status(self) -> int:
        return 0

    @property
    def tolerated_failures(self) -> List[StepResult]:
        return [s for s in self.steps if s.command.tolerated and not s.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.pipeline.mode.value,
            "schema": self.pipeline.schema,
            "dry_run": self.dry_run,
            "exit_status": self.exit_status,
            "commands": self.pipeline.describe(),
            "steps": [s.to_dict() for s in self.steps],
        }


def _resolve_schema(schema: SchemaRef) -> SchemaGeneration:
    if isinstance(schema, SchemaGeneration):
        return schema
    return get_schema(schema if schema is not None else DISPATCH.SCHEMA)


def select_mode(flags: FlagSet, schema: SchemaRef = None) -> Mode:
    """Return the mode selected by the first matching rule, else Mode.DEFAULT."""

    generation = _resolve_schema(schema)

    for position, rule in enumerate(generation.rules):
        if not flags.is_yes(rule.flag):
            continue
        ignored = [r.flag for r in generation.rules[position + 1:] if flags.is_yes(r.flag)]
        if ignored:
            logger.debug(f"{rule.flag}=yes takes priority; ignoring {', '.join(ignored)}")
        return rule.mode

    return Mode.DEFAULT


def build_pipeline(
    flags: FlagSet,
    *,
    schema: SchemaRef = None,
    tools: ToolConfig = TOOLS,
) -> Pipeline:
    """Select a mode and expand its step templates into commands.

    Raises:
        UnknownSchemaError: Unknown schema name
        UnrecognizedModeError: The schema declares no pipeline for the selected mode
    """

    generation = _resolve_schema(schema)
    mode = select_mode(flags, generation)

    templates = generation.pipelines.get(mode)
    if templates is None:
        raise UnrecognizedModeError(mode.value, generation.name)

    commands = tuple(expand_step(step, flags, tools=tools) for step in templates)
    return Pipeline(mode=mode, schema=generation.name, commands=commands)


def dispatch(
    flags: FlagSet,
    *,
    schema: SchemaRef = None,
    tools: ToolConfig = TOOLS,
    workdir: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Build the selected pipeline and run it.

    Args:
        flags: Captured CI flags
        schema: Configuration generation name or object (default: DISPATCH.SCHEMA)
        tools: Program names for the external tools
        workdir: Repository root the commands run in (default: cwd)
        env: Child process environment (default: inherit)
        dry_run: Only plan; run nothing

    Returns:
        PipelineResult. Failures propagate as MissingToolError or
        CommandFailedError.
    """

    pipeline = build_pipeline(flags, schema=schema, tools=tools)
    logger.info(
        f"Build mode: {pipeline.mode.value} (schema {pipeline.schema}, {len(pipeline.commands)} step(s))"
    )

    if dry_run:
        for line in pipeline.describe():
            logger.info(f"[dry-run] {line}")
        return PipelineResult(pipeline=pipeline, dry_run=True)

    steps = run_pipeline(
        pipeline.commands,
        workdir=workdir,
        env=env,
        name=f"buildmode.{pipeline.mode.value}",
    )
    result = PipelineResult(pipeline=pipeline, steps=steps)

    tolerated = result.tolerated_failures
    if tolerated:
        logger.info(
            f"Pipeline {pipeline.mode.value} succeeded with {len(tolerated)} tolerated failure(s)"
        )
    else:
        logger.info(f"Pipeline {pipeline.mode.value} succeeded")
    return result
