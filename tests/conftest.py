"""Shared fixtures: a recording stand-in for the external tools."""

from __future__ import annotations

import subprocess
from typing import Dict, List

import pytest


class FakeRun:
    """Records each argv and returns a scripted exit status (default 0).

    Keys of `returncodes` are the space-joined argv.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.cwds: List[str] = []
        self.returncodes: Dict[str, int] = {}

    def fail(self, command_line: str, returncode: int = 1) -> None:
        self.returncodes[command_line] = returncode

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        self.cwds.append(kwargs.get("cwd"))
        return subprocess.CompletedProcess(argv, self.returncodes.get(" ".join(argv), 0))

    @property
    def lines(self) -> List[str]:
        return [" ".join(argv) for argv in self.calls]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    """Replace process execution; every program resolves to its own name."""

    runner = FakeRun()
    monkeypatch.setattr("buildmode.pipeline.executor.subprocess.run", runner)
    monkeypatch.setattr(
        "buildmode.pipeline.executor.resolve_program",
        lambda program, env=None: program,
    )
    return runner


@pytest.fixture
def repo_root(tmp_path):
    """A workspace with the book/ directory the docs pipeline enters."""

    (tmp_path / "book").mkdir()
    return tmp_path
