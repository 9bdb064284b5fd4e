# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether a diagnostic was introduced by the change under review."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import ChangeStatus, ClassifiedDiagnostic, Diagnostic, ProvenanceMap


def classify(diagnostic: Diagnostic, provenance: ProvenanceMap, boundary: str) -> ChangeStatus:
    """Return the change status of ``diagnostic``.

    A line is inherited when the revision that last touched it starts with
    ``boundary``. Revision ids may be abbreviated differently by each tool, so
    the check is a one-way prefix match rather than equality. Lines missing
    from ``provenance`` are treated as new.

    Args:
        diagnostic: Finding to classify.
        provenance: Mapping of line number to the revision that last touched it.
        boundary: Revision identifying the pre-change state of the target branch.

    Returns:
        ChangeStatus: ``INHERITED`` for lines predating the change, else ``NEW``.
    """

    revision = provenance.get(diagnostic.line)
    if revision is not None and revision.startswith(boundary):
        return ChangeStatus.INHERITED
    return ChangeStatus.NEW


def classify_all(
    diagnostics: Iterable[Diagnostic],
    provenance: ProvenanceMap,
    boundary: str,
) -> Iterator[ClassifiedDiagnostic]:
    """Yield ``diagnostics`` paired with their status, preserving order."""

    for diagnostic in diagnostics:
        yield ClassifiedDiagnostic(diagnostic=diagnostic, status=classify(diagnostic, provenance, boundary))


__all__ = ["classify", "classify_all"]
