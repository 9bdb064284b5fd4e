# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""External tools consumed by the run: phpcs for diagnostics, git for provenance."""

from __future__ import annotations

from .base import CommandRunner, default_runner
from .blame import GitBlameSource, parse_line_porcelain
from .phpcs import PhpcsSource, parse_phpcs_report

__all__ = [
    "CommandRunner",
    "GitBlameSource",
    "PhpcsSource",
    "default_runner",
    "parse_line_porcelain",
    "parse_phpcs_report",
]
