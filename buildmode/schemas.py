"""
Configuration Generations
=========================
Versioned mode tables for the CI dispatcher.

Each SchemaGeneration declares, as data:
- the ordered mode rules (first flag equal to "yes" wins)
- the ordered step templates of every pipeline, including the default one

Two generations exist and are not reconciled with each other:

- v1: BENCHMARK selects a benchmark run, RUSTFMT is a separate fifth branch
  using the diff write mode, and the default pipeline builds in debug mode.
- v2: RUSTFMT takes the fourth branch with --check, and the default pipeline
  builds and tests in release mode and runs benchmarks in test mode.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from buildmode.errors import UnknownSchemaError
from buildmode.pipeline.commands import StepTemplate


class Mode(Enum):
    """CI build modes."""
    LINT = "lint"
    DOCS = "docs"
    COVERAGE = "coverage"
    BENCHMARK = "benchmark"
    FORMAT_CHECK = "format_check"
    DEFAULT = "default"


@dataclass(frozen=True)
class ModeRule:
    """Selects `mode` when `flag` equals "yes"."""

    mode: Mode
    flag: str


@dataclass(frozen=True)
class SchemaGeneration:
    """A named configuration generation."""

    name: str
    description: str
    rules: Tuple[ModeRule, ...]
    pipelines: Dict[Mode, Tuple[StepTemplate, ...]] = field(default_factory=dict)

    @property
    def flags(self) -> Tuple[str, ...]:
        return tuple(rule.flag for rule in self.rules)


_LINT = (
    StepTemplate("build-tool", ("clippy", "--all", "--", "-D", "warnings"), label="lint"),
)

_DOCS = (
    StepTemplate("build-tool", ("clean",), label="clean"),
    StepTemplate("build-tool", ("doc", "--all", "--no-deps", "{build_args}"), label="api-docs"),
    StepTemplate("book-tool", ("build",), cwd="book", label="book"),
    StepTemplate("copy-tool", ("-r", "book/book/", "target/doc/book/"), label="copy-book"),
    StepTemplate("upload-tool", ("doc-upload",), tolerated=True, label="doc-upload"),
)

_COVERAGE = (
    StepTemplate(
        "build-tool",
        ("tarpaulin", "--all", "--no-count", "--ciserver", "travis-ci", "--coveralls", "{job_id}"),
        label="coverage",
    ),
)


SCHEMA_V1 = SchemaGeneration(
    name="v1",
    description="BENCHMARK and RUSTFMT branches, fmt diff mode, debug builds",
    rules=(
        ModeRule(Mode.LINT, "CLIPPY"),
        ModeRule(Mode.DOCS, "DOCS"),
        ModeRule(Mode.COVERAGE, "COVERAGE"),
        ModeRule(Mode.BENCHMARK, "BENCHMARK"),
        ModeRule(Mode.FORMAT_CHECK, "RUSTFMT"),
    ),
    pipelines={
        Mode.LINT: _LINT,
        Mode.DOCS: _DOCS,
        Mode.COVERAGE: _COVERAGE,
        Mode.BENCHMARK: (
            StepTemplate("build-tool", ("bench", "--all", "{build_args}"), label="bench"),
        ),
        Mode.FORMAT_CHECK: (
            StepTemplate("build-tool", ("fmt", "--all", "--", "--write-mode=diff"), label="fmt"),
        ),
        Mode.DEFAULT: (
            StepTemplate("build-tool", ("build", "--all", "{build_args}"), label="build"),
            StepTemplate("build-tool", ("test", "--all", "{test_mode}", "{build_args}"), label="test"),
            StepTemplate("build-tool", ("build", "--benches", "--all", "{build_args}"), label="bench-build"),
        ),
    },
)

SCHEMA_V2 = SchemaGeneration(
    name="v2",
    description="RUSTFMT branch with --check, release builds, benches in test mode",
    rules=(
        ModeRule(Mode.LINT, "CLIPPY"),
        ModeRule(Mode.DOCS, "DOCS"),
        ModeRule(Mode.COVERAGE, "COVERAGE"),
        ModeRule(Mode.FORMAT_CHECK, "RUSTFMT"),
    ),
    pipelines={
        Mode.LINT: _LINT,
        Mode.DOCS: _DOCS,
        Mode.COVERAGE: _COVERAGE,
        Mode.FORMAT_CHECK: (
            StepTemplate("build-tool", ("fmt", "--all", "--", "--check"), label="fmt"),
        ),
        Mode.DEFAULT: (
            StepTemplate("build-tool", ("build", "{build_args}", "--release"), label="build"),
            StepTemplate(
                "build-tool",
                ("test", "{build_args}", "--all", "--release", "{test_mode}"),
                label="test",
            ),
            StepTemplate("build-tool", ("bench", "{build_args}", "--all", "--", "--test"), label="bench-build"),
        ),
    },
)


SCHEMAS: Dict[str, SchemaGeneration] = {
    SCHEMA_V1.name: SCHEMA_V1,
    SCHEMA_V2.name: SCHEMA_V2,
}


def list_schemas() -> List[str]:
    return sorted(SCHEMAS)


def get_schema(name: str) -> SchemaGeneration:
    """Look up a configuration generation by name.

    Raises:
        UnknownSchemaError: When no generation has that name
    """
    key = (name or "").strip().lower()
    try:
        return SCHEMAS[key]
    except KeyError:
        raise UnknownSchemaError(name, list_schemas()) from None
