# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run PHP_CodeSniffer and parse its JSON report."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ExternalToolError
from ..models import Diagnostic, LintBatchResult, LintTotals
from ..severity import parse_severity
from .base import CommandRunner, default_runner

REPORT_FLAG = "--report=json"
MAX_FINDINGS_STATUS = 2


class _PhpcsMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str
    source: str = ""
    type: str
    line: int
    column: int


class _PhpcsFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: list[_PhpcsMessage] = Field(default_factory=list)


class _PhpcsReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    totals: LintTotals
    files: dict[str, _PhpcsFile] = Field(default_factory=dict)


def parse_phpcs_report(stdout: str) -> LintBatchResult:
    """Parse phpcs ``--report=json`` output into a :class:`LintBatchResult`.

    Args:
        stdout: Raw JSON document printed by phpcs.

    Returns:
        LintBatchResult: Totals plus per-file diagnostics in report order.

    Raises:
        ExternalToolError: If the document is not a valid phpcs JSON report.
    """

    try:
        report = _PhpcsReport.model_validate(json.loads(stdout))
        files = {
            name: tuple(
                Diagnostic(
                    file=name,
                    line=message.line,
                    column=message.column,
                    severity=parse_severity(message.type),
                    message=message.message,
                    source=message.source,
                )
                for message in entry.messages
            )
            for name, entry in report.files.items()
        }
    except (json.JSONDecodeError, ValidationError, ValueError) as exc:
        raise ExternalToolError(f"phpcs produced an unreadable report: {exc}") from exc
    return LintBatchResult(totals=report.totals, files=files)


class PhpcsSource:
    """Diagnostic source backed by the phpcs executable."""

    def __init__(self, *, runner: CommandRunner | None = None, cwd: Path | None = None) -> None:
        """Create a phpcs source.

        Args:
            runner: Optional command runner; defaults to :func:`default_runner`.
            cwd: Working directory phpcs runs in.
        """

        self._runner = runner or default_runner
        self._cwd = cwd

    def lint(self, files: Sequence[str], phpcs_path: Path, options: Mapping[str, str]) -> LintBatchResult:
        """Lint ``files`` with the phpcs executable at ``phpcs_path``.

        phpcs exits 1 or 2 when it finds violations (2 when some are
        fixable); those statuses carry a report. Higher statuses are
        processing errors and fail even when a report was written.

        Args:
            files: Files to lint.
            phpcs_path: Path to the phpcs executable.
            options: Extra ``--key=value`` options such as ``standard``.

        Returns:
            LintBatchResult: Parsed report.

        Raises:
            ExternalToolError: If phpcs cannot be run, fails, or its report cannot be parsed.
        """

        if not files:
            return LintBatchResult()
        cmd = [str(phpcs_path), REPORT_FLAG]
        cmd.extend(f"--{key}={value}" for key, value in options.items())
        cmd.extend(files)
        completed = self._runner(cmd, self._cwd)
        if completed.returncode > MAX_FINDINGS_STATUS:
            raise ExternalToolError(
                f"phpcs failed with status {completed.returncode}",
                command=cmd,
                stderr=completed.stderr,
            )
        stdout = (completed.stdout or "").strip()
        if not stdout:
            raise ExternalToolError(
                f"phpcs exited with status {completed.returncode} without a report",
                command=cmd,
                stderr=completed.stderr,
            )
        return parse_phpcs_report(stdout)


__all__ = ["PhpcsSource", "parse_phpcs_report"]
