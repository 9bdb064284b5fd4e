# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while filtering phpcs findings."""

from __future__ import annotations

from collections.abc import Sequence


class PhpcsBlameError(RuntimeError):
    """Base class for fatal run errors."""


class ConfigurationError(PhpcsBlameError):
    """Raised when a required input is missing or the event payload is malformed."""


class ExternalToolError(PhpcsBlameError):
    """Raised when phpcs or git cannot be run or produce unusable output."""

    def __init__(self, message: str, *, command: Sequence[str] = (), stderr: str | None = None) -> None:
        """Initialise the error with the failing command and its stderr.

        Args:
            message: Human-readable description of the failure.
            command: Command sequence that was executed, when known.
            stderr: Captured standard error stream, when available.
        """

        super().__init__(message)
        self.command = tuple(command)
        self.stderr = stderr


__all__ = ["ConfigurationError", "ExternalToolError", "PhpcsBlameError"]
