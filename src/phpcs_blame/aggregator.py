# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fold classified diagnostics into a run-wide pass/fail decision."""

from __future__ import annotations

from collections.abc import Callable

from .models import ClassifiedDiagnostic, LintTotals, RunOutcome
from .severity import Severity

FailureCallback = Callable[[str], None]

NO_ERRORS_WARNINGS_IGNORED = "phpcs reported no errors and fail_on_warnings is disabled"
NO_ERRORS_NO_WARNINGS = "There are no errors or warnings from phpcs"


class DecisionAggregator:
    """Accumulate the :class:`RunOutcome` for a single run.

    The outcome is append-only: once a failure is recorded it is never rolled
    back, and recording continues so the full report is still produced.
    """

    def __init__(self, *, fail_on_warnings: bool, on_failure: FailureCallback | None = None) -> None:
        """Create an aggregator.

        Args:
            fail_on_warnings: Whether new warnings fail the run in addition to new errors.
            on_failure: Optional callback invoked with each failure reason as it is recorded.
        """

        self._fail_on_warnings = fail_on_warnings
        self._on_failure = on_failure
        self._outcome = RunOutcome()
        self.short_circuit_reason: str | None = None

    @property
    def outcome(self) -> RunOutcome:
        """Return the outcome recorded so far."""

        return self._outcome

    def record_severity_policy_outcome(self, totals: LintTotals) -> bool:
        """Apply the batch-level pre-filter.

        Args:
            totals: Aggregate counts for the whole lint batch.

        Returns:
            bool: ``True`` when nothing in the batch can fail the run, meaning
            per-line classification (and therefore blame) can be skipped.
        """

        if totals.errors:
            return False
        if not self._fail_on_warnings:
            self.short_circuit_reason = NO_ERRORS_WARNINGS_IGNORED
        elif not totals.warnings:
            self.short_circuit_reason = NO_ERRORS_NO_WARNINGS
        else:
            return False
        self._outcome.short_circuited = True
        return True

    def contributes_to_failure(self, classified: ClassifiedDiagnostic) -> bool:
        """Return ``True`` when ``classified`` fails the run under the severity policy."""

        if not classified.is_new:
            return False
        severity = classified.diagnostic.severity
        if severity is Severity.ERROR:
            return True
        return severity is Severity.WARNING and self._fail_on_warnings

    def record_diagnostic(self, classified: ClassifiedDiagnostic) -> None:
        """Record a classified diagnostic, failing the run when it contributes."""

        if self.contributes_to_failure(classified):
            self._fail(classified.diagnostic.message)

    def record_file_blamed(self) -> None:
        """Count a file whose provenance was fetched."""

        self._outcome.files_blamed += 1

    def record_fatal(self, error: BaseException) -> None:
        """Record a fatal error as a run failure carrying its message."""

        self._fail(str(error) or type(error).__name__)

    def _fail(self, reason: str) -> None:
        self._outcome.should_fail = True
        self._outcome.failure_reasons.append(reason)
        if self._on_failure is not None:
            self._on_failure(reason)


__all__ = ["DecisionAggregator", "FailureCallback"]
