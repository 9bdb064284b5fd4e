# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity levels reported by phpcs."""

    ERROR = "error"
    WARNING = "warning"


def parse_severity(raw: str) -> Severity:
    """Return the :class:`Severity` named by a phpcs ``type`` value.

    Args:
        raw: Severity label such as ``"ERROR"`` or ``"WARNING"``.

    Returns:
        Severity: Normalised severity.

    Raises:
        ValueError: If ``raw`` is not a known severity label.
    """

    try:
        return Severity(raw.strip().lower())
    except ValueError as exc:
        raise ValueError(f"unknown severity '{raw}'") from exc


__all__ = ["Severity", "parse_severity"]
