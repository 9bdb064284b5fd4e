# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the ``phpcs-blame run`` command."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest
from typer.testing import CliRunner

from phpcs_blame import cli
from phpcs_blame.cli import app
from phpcs_blame.errors import ExternalToolError
from phpcs_blame.models import Diagnostic, LintBatchResult, LintTotals, ProvenanceMap
from phpcs_blame.severity import Severity

CLEAN_ENV: dict[str, str | None] = {
    "GITHUB_EVENT_PATH": None,
    "INPUT_PHPCS_PATH": None,
    "INPUT_STANDARD": None,
    "INPUT_FAIL_ON_WARNINGS": None,
}


class StubPhpcs:
    batch = LintBatchResult()
    calls: list[tuple[list[str], Path, dict[str, str]]] = []

    def __init__(self, *, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def lint(self, files: Sequence[str], phpcs_path: Path, options: Mapping[str, str]) -> LintBatchResult:
        type(self).calls.append((list(files), phpcs_path, dict(options)))
        return type(self).batch


class StubBlame:
    maps: dict[str, ProvenanceMap] = {}
    calls: list[tuple[str, str]] = []

    def __init__(self, *, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def blame(self, file: str, *, rev: str) -> ProvenanceMap:
        type(self).calls.append((file, rev))
        if file not in type(self).maps:
            raise ExternalToolError(f"git blame failed for {file}")
        return type(self).maps[file]


@pytest.fixture
def stubs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    root = tmp_path.resolve()
    file = str(root / "a.php")
    StubPhpcs.batch = LintBatchResult(
        totals=LintTotals(errors=1, warnings=1),
        files={
            file: (
                Diagnostic(file=file, line=5, column=3, severity=Severity.ERROR, message="unused var", source="Sniff.A"),
                Diagnostic(file=file, line=9, column=1, severity=Severity.WARNING, message="style", source="Sniff.B"),
            ),
        },
    )
    StubPhpcs.calls = []
    StubBlame.maps = {file: {5: "abc123", 9: "deadbee"}}
    StubBlame.calls = []
    monkeypatch.setattr(cli, "PhpcsSource", StubPhpcs)
    monkeypatch.setattr(cli, "GitBlameSource", StubBlame)
    return root


def _invoke(root: Path, *args: str, env: Mapping[str, str | None] | None = None):
    runner = CliRunner()
    merged = {**CLEAN_ENV, **(env or {})}
    return runner.invoke(app, ["run", *args, "--root", str(root), "--no-emoji"], env=merged)


def test_new_warning_fails_run(stubs: Path) -> None:
    result = _invoke(stubs, "a.php", "--phpcs-path", "phpcs", "--base-sha", "abc1")

    assert result.exit_code == 1
    lines = result.stdout.splitlines()
    assert '<file name="a.php">' in lines
    new_warning = '<error line="9" column="1" severity="warning" message="style" source="Sniff.B"/>'
    assert new_warning in lines
    assert lines[lines.index(new_warning) + 1] == "::error::style"
    assert '::debug::<error line="5" column="3" severity="error" message="unused var" source="Sniff.A"/>' in lines
    assert '<error line="5" column="3" severity="error" message="unused var" source="Sniff.A"/>' not in lines
    assert StubBlame.calls == [(str(stubs / "a.php"), "abc1..")]


def test_inputs_from_action_environment(stubs: Path) -> None:
    event = stubs / "event.json"
    event.write_text(json.dumps({"pull_request": {"base": {"sha": "abc1"}}}), encoding="utf-8")

    result = _invoke(
        stubs,
        "a.php",
        env={
            "GITHUB_EVENT_PATH": str(event),
            "INPUT_PHPCS_PATH": "vendor/bin/phpcs",
            "INPUT_STANDARD": "PSR12",
            "INPUT_FAIL_ON_WARNINGS": "off",
        },
    )

    assert result.exit_code == 0
    assert '<error line="9" column="1" severity="warning" message="style" source="Sniff.B"/>' in result.stdout
    assert "::error::" not in result.stdout
    assert StubPhpcs.calls == [(["a.php"], Path("vendor/bin/phpcs"), {"standard": "PSR12"})]


def test_short_circuit_reports_reason(stubs: Path) -> None:
    StubPhpcs.batch = LintBatchResult(totals=LintTotals(errors=0, warnings=0))

    result = _invoke(stubs, "a.php", "--phpcs-path", "phpcs", "--base-sha", "abc1")

    assert result.exit_code == 0
    assert "There are no errors or warnings from phpcs" in result.stdout
    assert StubBlame.calls == []


def test_missing_phpcs_path(stubs: Path) -> None:
    result = _invoke(stubs, "a.php", "--base-sha", "abc1")

    assert result.exit_code == 1
    assert "::error::Input required and not supplied: phpcs_path" in result.stdout
    assert StubPhpcs.calls == []


def test_missing_event_payload(stubs: Path) -> None:
    result = _invoke(stubs, "a.php", "--phpcs-path", "phpcs")

    assert result.exit_code == 1
    assert "::error::No event payload available" in result.stdout
    assert StubPhpcs.calls == []


def test_blame_failure_fails_run(stubs: Path) -> None:
    StubBlame.maps = {}

    result = _invoke(stubs, "a.php", "--phpcs-path", "phpcs", "--base-sha", "abc1")

    assert result.exit_code == 1
    assert f"::error::git blame failed for {stubs / 'a.php'}" in result.stdout


def test_no_changed_files(stubs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class NoChanges:
        def discover(self, base: str, root: Path, patterns: Sequence[str]) -> list[str]:
            assert base == "abc1"
            assert tuple(patterns) == ("*.php",)
            return []

    monkeypatch.setattr(cli, "ChangedFileDiscovery", NoChanges)

    result = _invoke(stubs, "--phpcs-path", "phpcs", "--base-sha", "abc1")

    assert result.exit_code == 0
    assert "No files to lint" in result.stdout
    assert StubPhpcs.calls == []
