"""Pipeline commands.

A StepTemplate is the declarative form stored in a schema; expand_step turns
it into a concrete Command for one invocation.

Placeholders are whole argument tokens:
- {build_args}: the BuildArgs tokens (possibly none)
- {job_id}: TRAVIS_JOB_ID, dropped when empty
- {test_mode}: nothing on the stable toolchain, otherwise --tests

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from buildmode.config import TOOLS, ToolConfig
from buildmode.flags import FlagSet


@dataclass(frozen=True)
class StepTemplate:
    """One pipeline step as declared in a configuration generation."""

    tool: str
    args: Tuple[str, ...] = ()
    cwd: Optional[str] = None
    tolerated: bool = False
    label: str = ""


@dataclass(frozen=True)
class Command:
    """A concrete external process invocation."""

    program: str
    args: Tuple[str, ...] = ()
    cwd: Optional[str] = None
    tolerated: bool = False
    label: str = ""

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        """Shell-style rendering used for trace lines."""
        text = shlex.join(self.argv)
        if self.cwd:
            text = f"(cd {shlex.quote(self.cwd)} && {text})"
        if self.tolerated:
            text += " || true"
        return text


def placeholder_values(flags: FlagSet) -> Dict[str, Tuple[str, ...]]:
    job_id = flags.TRAVIS_JOB_ID
    return {
        "{build_args}": flags.build_args,
        "{job_id}": (job_id,) if job_id else (),
        "{test_mode}": () if flags.is_stable_toolchain else ("--tests",),
    }


def expand_args(args: Tuple[str, ...], flags: FlagSet) -> Tuple[str, ...]:
    values = placeholder_values(flags)
    out: List[str] = []
    for token in args:
        if token in values:
            out.extend(values[token])
        elif token.startswith("{") and token.endswith("}"):
            raise ValueError(f"Unknown placeholder in step template: {token}")
        else:
            out.append(token)
    return tuple(out)


def expand_step(
    step: StepTemplate,
    flags: FlagSet,
    *,
    tools: ToolConfig = TOOLS,
) -> Command:
    return Command(
        program=tools.program_for(step.tool),
        args=expand_args(step.args, flags),
        cwd=step.cwd,
        tolerated=step.tolerated,
        label=step.label,
    )
