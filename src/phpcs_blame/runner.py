# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint a batch of files and keep only the findings on lines the change touched."""

from __future__ import annotations

import json
import traceback
from collections.abc import Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from .aggregator import DecisionAggregator
from .classifier import classify_all
from .config import RunConfig
from .models import LintBatchResult, ProvenanceMap, RunOutcome
from .reporting import AnnotationReporter, LineSink


class DiagnosticSource(Protocol):
    """Produce diagnostics for a batch of files."""

    def lint(self, files: Sequence[str], phpcs_path: Path, options: Mapping[str, str]) -> LintBatchResult:
        """Return the lint result for ``files``."""
        ...


class ProvenanceSource(Protocol):
    """Produce the per-line revision map of a file."""

    def blame(self, file: str, *, rev: str) -> ProvenanceMap:
        """Return the provenance map of ``file`` for revision range ``rev``."""
        ...


def run_on_blame(
    files: Sequence[str],
    config: RunConfig,
    *,
    diagnostics: DiagnosticSource,
    provenance: ProvenanceSource,
    reporter: AnnotationReporter,
    aggregator: DecisionAggregator,
    debug: LineSink,
) -> RunOutcome:
    """Lint ``files`` and report, file by file, which findings the change introduced.

    Any exception raised by a source or sink aborts the run; it is logged to
    ``debug`` with its traceback and recorded as a single failure.

    Args:
        files: Files to lint.
        config: Run configuration.
        diagnostics: Source of lint diagnostics.
        provenance: Source of per-line revisions.
        reporter: Reporter receiving each file's classified diagnostics.
        aggregator: Aggregator owning the run outcome.
        debug: Sink for diagnostic detail not meant for annotations.

    Returns:
        RunOutcome: Final outcome of the run.
    """

    try:
        _run(files, config, diagnostics, provenance, reporter, aggregator, debug)
    except Exception as exc:  # noqa: BLE001 - any collaborator failure fails the run
        debug(traceback.format_exc())
        aggregator.record_fatal(exc)
    return aggregator.outcome


def _run(
    files: Sequence[str],
    config: RunConfig,
    diagnostics: DiagnosticSource,
    provenance: ProvenanceSource,
    reporter: AnnotationReporter,
    aggregator: DecisionAggregator,
    debug: LineSink,
) -> None:
    batch = diagnostics.lint(files, config.phpcs_path, config.lint_options())
    debug(f"phpcs reported {batch.diagnostic_count()} finding(s) in {len(batch.files)} file(s)")
    debug(batch.model_dump_json())
    if aggregator.record_severity_policy_outcome(batch.totals):
        return

    names = list(batch.files)
    for name, provenance_map in zip(names, _fetch_provenance(names, config, provenance), strict=True):
        aggregator.record_file_blamed()
        debug(json.dumps({str(line): rev for line, rev in provenance_map.items()}))
        reporter.start_file(name)
        for item in classify_all(batch.files[name], provenance_map, config.base_revision):
            reporter.report_diagnostic(item)
            aggregator.record_diagnostic(item)


def _fetch_provenance(
    names: Sequence[str],
    config: RunConfig,
    provenance: ProvenanceSource,
) -> Iterator[ProvenanceMap]:
    """Yield provenance maps in the order of ``names``.

    With more than one job the maps are fetched concurrently but still yielded
    in file order, so output and failure reasons do not depend on timing.
    """

    rev = config.blame_range
    if config.jobs <= 1 or len(names) <= 1:
        for name in names:
            yield provenance.blame(name, rev=rev)
        return
    executor = ThreadPoolExecutor(max_workers=config.jobs, thread_name_prefix="phpcs-blame")
    try:
        yield from executor.map(lambda name: provenance.blame(name, rev=rev), names)
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


__all__ = ["DiagnosticSource", "ProvenanceSource", "run_on_blame"]
