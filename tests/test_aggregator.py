# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the pass/fail decision."""

from __future__ import annotations

import pytest

from phpcs_blame.aggregator import DecisionAggregator
from phpcs_blame.errors import ExternalToolError
from phpcs_blame.models import ChangeStatus, ClassifiedDiagnostic, LintTotals
from phpcs_blame.severity import Severity


def _classified(diagnostic, status: ChangeStatus) -> ClassifiedDiagnostic:
    return ClassifiedDiagnostic(diagnostic=diagnostic, status=status)


@pytest.mark.parametrize(
    ("fail_on_warnings", "totals", "expected"),
    [
        (True, LintTotals(errors=0, warnings=0), True),
        (False, LintTotals(errors=0, warnings=4), True),
        (True, LintTotals(errors=0, warnings=4), False),
        (False, LintTotals(errors=1, warnings=0), False),
        (True, LintTotals(errors=2, warnings=2), False),
    ],
)
def test_severity_pre_filter(fail_on_warnings: bool, totals: LintTotals, expected: bool) -> None:
    aggregator = DecisionAggregator(fail_on_warnings=fail_on_warnings)

    assert aggregator.record_severity_policy_outcome(totals) is expected
    assert aggregator.outcome.short_circuited is expected
    assert (aggregator.short_circuit_reason is not None) is expected
    assert aggregator.outcome.should_fail is False


def test_new_error_fails(make_diagnostic) -> None:
    aggregator = DecisionAggregator(fail_on_warnings=False)
    aggregator.record_diagnostic(_classified(make_diagnostic(1, Severity.ERROR, "boom"), ChangeStatus.NEW))

    assert aggregator.outcome.should_fail
    assert aggregator.outcome.failure_reasons == ["boom"]


def test_new_warning_fails_only_when_enabled(make_diagnostic) -> None:
    warning = _classified(make_diagnostic(1, Severity.WARNING, "style"), ChangeStatus.NEW)

    lenient = DecisionAggregator(fail_on_warnings=False)
    lenient.record_diagnostic(warning)
    strict = DecisionAggregator(fail_on_warnings=True)
    strict.record_diagnostic(warning)

    assert not lenient.outcome.should_fail
    assert strict.outcome.failure_reasons == ["style"]


def test_inherited_findings_never_fail(make_diagnostic) -> None:
    aggregator = DecisionAggregator(fail_on_warnings=True)
    aggregator.record_diagnostic(_classified(make_diagnostic(1, Severity.ERROR), ChangeStatus.INHERITED))
    aggregator.record_diagnostic(_classified(make_diagnostic(2, Severity.WARNING), ChangeStatus.INHERITED))

    assert not aggregator.outcome.should_fail
    assert aggregator.outcome.failure_reasons == []


def test_recording_continues_after_failure_and_notifies(make_diagnostic) -> None:
    seen: list[str] = []
    aggregator = DecisionAggregator(fail_on_warnings=True, on_failure=seen.append)
    for index, message in enumerate(["one", "two", "three"], start=1):
        aggregator.record_diagnostic(_classified(make_diagnostic(index, message=message), ChangeStatus.NEW))

    assert aggregator.outcome.failure_reasons == ["one", "two", "three"]
    assert seen == ["one", "two", "three"]


def test_fatal_error_becomes_failure() -> None:
    aggregator = DecisionAggregator(fail_on_warnings=True)
    aggregator.record_fatal(ExternalToolError("git blame failed for a.php"))

    assert aggregator.outcome.should_fail
    assert aggregator.outcome.failure_reasons == ["git blame failed for a.php"]
