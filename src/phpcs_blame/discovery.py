# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-based discovery of the files a pull request changed."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from fnmatch import fnmatch
from pathlib import Path
from typing import Final

from .errors import ExternalToolError
from .sources.base import CommandRunner, default_runner

DEFAULT_PATTERNS: Final[tuple[str, ...]] = ("*.php",)


class ChangedFileDiscovery:
    """Collect added or modified files between a base revision and ``HEAD``."""

    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        """Create a discovery strategy.

        Args:
            runner: Optional command runner used to execute git commands.
        """

        self._runner = runner or default_runner

    def discover(self, base: str, root: Path, patterns: Sequence[str] = DEFAULT_PATTERNS) -> list[str]:
        """Return changed files matching ``patterns``, in git's order.

        Args:
            base: Revision to diff against.
            root: Repository root directory.
            patterns: Glob patterns a file name or path must match.

        Returns:
            list[str]: Paths relative to ``root`` that still exist.

        Raises:
            ExternalToolError: If git fails.
        """

        return [
            name
            for name in self._diff_names(base, root)
            if _matches(name, patterns) and (root / name).is_file()
        ]

    def _diff_names(self, base: str, root: Path) -> Iterator[str]:
        cmd = ["git", "diff", "--name-only", "--diff-filter=AM", base, "HEAD", "--"]
        completed = self._runner(cmd, root)
        if completed.returncode != 0:
            raise ExternalToolError(
                f"git diff failed: {(completed.stderr or '').strip() or completed.returncode}",
                command=cmd,
                stderr=completed.stderr,
            )
        for raw in (completed.stdout or "").splitlines():
            stripped = raw.strip()
            if stripped:
                yield stripped


def _matches(name: str, patterns: Sequence[str]) -> bool:
    basename = Path(name).name
    return any(fnmatch(name, pattern) or fnmatch(basename, pattern) for pattern in patterns)


__all__ = ["DEFAULT_PATTERNS", "ChangedFileDiscovery"]
