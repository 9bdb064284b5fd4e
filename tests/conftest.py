# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from phpcs_blame.config import RunConfig
from phpcs_blame.models import Diagnostic
from phpcs_blame.severity import Severity

DiagnosticFactory = Callable[..., Diagnostic]

LATIN1_BASE = b"<?php\n// caf\xe9\n$x = 1;\n"
LATIN1_CHANGED = LATIN1_BASE + b"$y = 2;\n"


@dataclass(frozen=True)
class GitHistory:
    """Repository with a base commit and one commit on top of it."""

    path: Path
    base: str
    head: str


def _git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def make_diagnostic() -> DiagnosticFactory:
    """Return a factory building diagnostics with sensible defaults."""

    def factory(
        line: int,
        severity: Severity = Severity.ERROR,
        message: str = "problem",
        *,
        file: str = "a.php",
        column: int = 1,
        source: str = "Generic.Sniff",
    ) -> Diagnostic:
        return Diagnostic(file=file, line=line, column=column, severity=severity, message=message, source=source)

    return factory


@pytest.fixture
def run_config(tmp_path: Path) -> RunConfig:
    """Return a configuration rooted at ``tmp_path`` with boundary ``abc1``."""

    return RunConfig(phpcs_path=Path("/usr/bin/phpcs"), base_revision="abc1", root=tmp_path)


@pytest.fixture
def latin1_history(tmp_path: Path) -> GitHistory:
    """Return a repository whose ``a.php`` is Latin-1 encoded and gains line 4 after the base commit."""

    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    source = repo / "a.php"
    source.write_bytes(LATIN1_BASE)
    _git(repo, "add", "a.php")
    _git(repo, "commit", "-q", "-m", "base")
    base = _git(repo, "rev-parse", "HEAD")
    source.write_bytes(LATIN1_CHANGED)
    _git(repo, "commit", "-q", "-am", "change")
    head = _git(repo, "rev-parse", "HEAD")
    return GitHistory(path=repo, base=base, head=head)
