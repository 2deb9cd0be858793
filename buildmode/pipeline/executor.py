"""
Pipeline Executor
=================
Run an ordered list of commands one at a time, stopping at the first failure.

Each command is traced (logged as "+ <command>") before it starts. Child
stdout/stderr are inherited so the CI log shows the tools' own output.
A step marked tolerated may fail, or be missing entirely, without affecting
the pipeline outcome.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from loguru import logger

from buildmode.errors import CommandFailedError, MissingToolError
from buildmode.pipeline.commands import Command
from buildmode.tracing import get_tracer, safe_set_span_attributes


MISSING_TOOL_STATUS = 127


@dataclass(frozen=True)
class StepResult:
    """Outcome of one executed step."""

    command: Command
    exit_status: Optional[int]
    skipped: bool = False

    @property
    def success(self) -> bool:
        return self.exit_status == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.command.label,
            "command": self.command.display(),
            "exit_status": self.exit_status,
            "tolerated": self.command.tolerated,
            "skipped": self.skipped,
        }


def normalize_returncode(returncode: int) -> int:
    """Map a signal-terminated child (negative returncode) to 128 + signal."""
    rc = int(returncode)
    if rc < 0:
        return 128 + (-rc)
    return rc


def resolve_program(program: str, *, env: Mapping[str, str]) -> Optional[str]:
    """Locate a program; the result is absolute so it survives a changed step cwd."""
    found = shutil.which(program, path=env.get("PATH"))
    if found is None:
        return None
    return os.path.abspath(found)


def _step_cwd(command: Command, workdir: Path) -> Path:
    if command.cwd:
        return workdir / command.cwd
    return workdir


def run_command(
    command: Command,
    *,
    workdir: Path,
    env: Mapping[str, str],
) -> StepResult:
    """Run a single command and apply its toleration policy.

    Raises:
        MissingToolError: Program not found for a non-tolerated step
        CommandFailedError: Nonzero exit of a non-tolerated step
    """

    logger.info(f"+ {command.display()}")

    program_path = resolve_program(command.program, env=env)
    if program_path is None:
        if command.tolerated:
            logger.warning(f"Tool not found, step tolerated: {command.program}")
            return StepResult(command=command, exit_status=MISSING_TOOL_STATUS, skipped=True)
        raise MissingToolError(command.program, command)
    logger.debug(f"Resolved {command.program} -> {program_path}")

    cwd = _step_cwd(command, workdir)
    if not cwd.is_dir():
        logger.error(f"Working directory does not exist: {cwd}")
        if command.tolerated:
            return StepResult(command=command, exit_status=1)
        raise CommandFailedError(command, 1)

    try:
        proc = subprocess.run(
            [program_path, *command.args],
            cwd=str(cwd),
            env=dict(env),
            check=False,
        )
    except (FileNotFoundError, PermissionError) as e:
        if command.tolerated:
            logger.warning(f"Could not execute {command.program} ({type(e).__name__}), step tolerated")
            return StepResult(command=command, exit_status=MISSING_TOOL_STATUS, skipped=True)
        raise MissingToolError(command.program, command) from e

    status = normalize_returncode(proc.returncode)
    if status != 0:
        if command.tolerated:
            logger.warning(f"Tolerated failure (exit {status}): {command.display()}")
        else:
            raise CommandFailedError(command, status)

    return StepResult(command=command, exit_status=status)


def run_pipeline(
    commands: Sequence[Command],
    *,
    workdir: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    name: str = "pipeline",
) -> List[StepResult]:
    """Run commands sequentially with fail-fast semantics.

    Args:
        commands: Ordered commands to run
        workdir: Directory relative step cwds resolve against (default: cwd)
        env: Child environment (default: inherit os.environ)
        name: Span name for the whole run

    Returns:
        One StepResult per executed step

    Raises:
        MissingToolError, CommandFailedError: From the first fatal step;
            later steps are not run.
    """

    root = Path(workdir) if workdir is not None else Path.cwd()
    child_env: Mapping[str, str] = os.environ if env is None else env
    tracer = get_tracer("buildmode-executor")

    results: List[StepResult] = []
    with tracer.start_as_current_span(name) as pipeline_span:
        safe_set_span_attributes(pipeline_span, {"steps.total": len(commands), "workdir": str(root)})

        for index, command in enumerate(commands, start=1):
            with tracer.start_as_current_span(command.label or command.program) as span:
                safe_set_span_attributes(
                    span,
                    {
                        "step.index": index,
                        "step.argv": command.argv,
                        "step.tolerated": command.tolerated,
                    },
                )
                try:
                    result = run_command(command, workdir=root, env=child_env)
                except (MissingToolError, CommandFailedError) as e:
                    safe_set_span_attributes(span, {"step.exit_status": e.exit_status, "error": str(e)})
                    safe_set_span_attributes(pipeline_span, {"success": False, "failed_step": index})
                    raise
                safe_set_span_attributes(
                    span,
                    {"step.exit_status": result.exit_status, "step.skipped": result.skipped},
                )
            results.append(result)

        safe_set_span_attributes(pipeline_span, {"success": True})

    return results
