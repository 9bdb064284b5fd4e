# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the phpcs_blame package."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

from .severity import Severity

ProvenanceMap = Mapping[int, str]


class ChangeStatus(str, Enum):
    """Whether a diagnostic sits on a line introduced by the change."""

    NEW = "new"
    INHERITED = "inherited"


class Diagnostic(BaseModel):
    """Single phpcs finding anchored to a file location."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: PositiveInt
    column: PositiveInt
    severity: Severity
    message: str
    source: str


class LintTotals(BaseModel):
    """Aggregate counts reported by phpcs for a batch."""

    model_config = ConfigDict(frozen=True)

    errors: NonNegativeInt = 0
    warnings: NonNegativeInt = 0
    fixable: NonNegativeInt = 0


class LintBatchResult(BaseModel):
    """Diagnostics for a batch of files, grouped per file in phpcs order."""

    model_config = ConfigDict(frozen=True)

    totals: LintTotals = Field(default_factory=LintTotals)
    files: dict[str, tuple[Diagnostic, ...]] = Field(default_factory=dict)

    def diagnostic_count(self) -> int:
        """Return the number of diagnostics across all files."""

        return sum(len(items) for items in self.files.values())


class ClassifiedDiagnostic(BaseModel):
    """Diagnostic paired with its change status."""

    model_config = ConfigDict(frozen=True)

    diagnostic: Diagnostic
    status: ChangeStatus

    @property
    def is_new(self) -> bool:
        """Return ``True`` when the diagnostic was introduced by the change."""

        return self.status is ChangeStatus.NEW


class RunOutcome(BaseModel):
    """Pass/fail decision accumulated over a run."""

    should_fail: bool = False
    failure_reasons: list[str] = Field(default_factory=list)
    files_blamed: NonNegativeInt = 0
    short_circuited: bool = False


__all__ = [
    "ChangeStatus",
    "ClassifiedDiagnostic",
    "Diagnostic",
    "LintBatchResult",
    "LintTotals",
    "ProvenanceMap",
    "RunOutcome",
]
