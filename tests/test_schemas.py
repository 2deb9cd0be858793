"""
Configuration Generation Tests
==============================
Tests for the versioned mode tables and step template expansion.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import pytest

from buildmode.config import ToolConfig
from buildmode.errors import UnknownSchemaError
from buildmode.flags import FlagSet
from buildmode.pipeline.commands import Command, StepTemplate, expand_args, expand_step
from buildmode.schemas import SCHEMA_V1, SCHEMA_V2, SCHEMAS, Mode, get_schema, list_schemas


class TestSchemaTables:
    """Shape of the two configuration generations."""

    @pytest.mark.unit
    def test_known_schemas(self):
        assert list_schemas() == ["v1", "v2"]

    @pytest.mark.unit
    def test_get_schema_is_case_insensitive(self):
        assert get_schema("V2") is SCHEMA_V2
        assert get_schema(" v1 ") is SCHEMA_V1

    @pytest.mark.unit
    def test_get_schema_unknown_name(self):
        with pytest.raises(UnknownSchemaError, match="v3") as excinfo:
            get_schema("v3")
        assert excinfo.value.known == ["v1", "v2"]
        assert isinstance(excinfo.value, ValueError)

    @pytest.mark.unit
    def test_v1_rule_order(self):
        assert SCHEMA_V1.flags == ("CLIPPY", "DOCS", "COVERAGE", "BENCHMARK", "RUSTFMT")

    @pytest.mark.unit
    def test_v2_rule_order(self):
        assert SCHEMA_V2.flags == ("CLIPPY", "DOCS", "COVERAGE", "RUSTFMT")
        assert Mode.BENCHMARK not in SCHEMA_V2.pipelines

    @pytest.mark.unit
    @pytest.mark.parametrize("name", sorted(SCHEMAS))
    def test_every_rule_has_a_pipeline(self, name):
        generation = SCHEMAS[name]
        for rule in generation.rules:
            assert rule.mode in generation.pipelines
        assert Mode.DEFAULT in generation.pipelines

    @pytest.mark.unit
    @pytest.mark.parametrize("name", sorted(SCHEMAS))
    def test_only_doc_upload_is_tolerated(self, name):
        tolerated = [
            (mode, step.label)
            for mode, steps in SCHEMAS[name].pipelines.items()
            for step in steps
            if step.tolerated
        ]
        assert tolerated == [(Mode.DOCS, "doc-upload")]


class TestTemplateExpansion:
    """Placeholder expansion into concrete commands."""

    @pytest.mark.unit
    def test_build_args_expand_to_nothing_by_default(self):
        assert expand_args(("doc", "--all", "{build_args}"), FlagSet()) == ("doc", "--all")

    @pytest.mark.unit
    def test_build_args_expand_in_place(self):
        flags = FlagSet(HTML_REPORTS="no")
        assert expand_args(("build", "{build_args}", "--release"), flags) == (
            "build",
            "--no-default-features",
            "--release",
        )

    @pytest.mark.unit
    def test_job_id_passed_verbatim(self):
        assert expand_args(("--coveralls", "{job_id}"), FlagSet(TRAVIS_JOB_ID="98765")) == (
            "--coveralls",
            "98765",
        )

    @pytest.mark.unit
    def test_empty_job_id_is_dropped(self):
        assert expand_args(("--coveralls", "{job_id}"), FlagSet()) == ("--coveralls",)

    @pytest.mark.unit
    def test_test_mode(self):
        assert expand_args(("test", "{test_mode}"), FlagSet(TRAVIS_RUST_VERSION="stable")) == ("test",)
        assert expand_args(("test", "{test_mode}"), FlagSet(TRAVIS_RUST_VERSION="1.20.0")) == (
            "test",
            "--tests",
        )

    @pytest.mark.unit
    def test_unknown_placeholder_rejected(self):
        with pytest.raises(ValueError, match="Unknown placeholder"):
            expand_args(("{nope}",), FlagSet())

    @pytest.mark.unit
    def test_expand_step_uses_tool_config(self):
        tools = ToolConfig(CARGO="/opt/cargo/bin/cargo", MDBOOK="mdbook-0.4")
        step = StepTemplate("book-tool", ("build",), cwd="book", label="book")

        command = expand_step(step, FlagSet(), tools=tools)

        assert command == Command(program="mdbook-0.4", args=("build",), cwd="book", label="book")

    @pytest.mark.unit
    def test_unknown_tool_role(self):
        with pytest.raises(KeyError):
            expand_step(StepTemplate("doc-tool"), FlagSet())


class TestCommandDisplay:
    @pytest.mark.unit
    def test_plain(self):
        assert Command("cargo", ("clippy", "--all", "--", "-D", "warnings")).display() == (
            "cargo clippy --all -- -D warnings"
        )

    @pytest.mark.unit
    def test_cwd_and_toleration_are_visible(self):
        assert Command("mdbook", ("build",), cwd="book").display() == "(cd book && mdbook build)"
        assert Command("travis-cargo", ("doc-upload",), tolerated=True).display() == (
            "travis-cargo doc-upload || true"
        )
