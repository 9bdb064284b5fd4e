# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-line provenance from ``git blame``."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from ..errors import ExternalToolError
from ..models import ProvenanceMap
from .base import CommandRunner, default_runner

# <sha> <line in original file> <line in final file> [<lines in group>]
_HEADER_RE: Final[re.Pattern[str]] = re.compile(r"^(?P<sha>[0-9a-f]{7,64}) \d+ (?P<final>\d+)(?: \d+)?$")


def parse_line_porcelain(lines: Iterable[str]) -> dict[int, str]:
    """Map final line numbers to revisions from ``git blame --line-porcelain`` output.

    Args:
        lines: Output lines of ``git blame --line-porcelain``.

    Returns:
        dict[int, str]: Revision that last touched each line of the file.
    """

    provenance: dict[int, str] = {}
    for raw in lines:
        if raw.startswith("\t"):
            continue
        match = _HEADER_RE.match(raw.rstrip("\r\n"))
        if match:
            provenance[int(match.group("final"))] = match.group("sha")
    return provenance


class GitBlameSource:
    """Provenance source backed by ``git blame``."""

    def __init__(self, *, runner: CommandRunner | None = None, cwd: Path | None = None) -> None:
        """Create a git blame source.

        Args:
            runner: Optional command runner; defaults to :func:`default_runner`.
            cwd: Repository working directory.
        """

        self._runner = runner or default_runner
        self._cwd = cwd

    def blame(self, file: str, *, rev: str) -> ProvenanceMap:
        """Return the provenance map of ``file`` restricted to ``rev``.

        Lines last changed at or before the start of ``rev`` are attributed
        to the boundary commit itself.

        Args:
            file: File to blame.
            rev: Revision range passed verbatim to git, e.g. ``"<base>.."``.

        Returns:
            ProvenanceMap: Mapping of line number to revision.

        Raises:
            ExternalToolError: If git fails.
        """

        cmd = ["git", "blame", "--line-porcelain", rev, "--", file]
        completed = self._runner(cmd, self._cwd)
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise ExternalToolError(
                f"git blame failed for {file}: {stderr or f'exit status {completed.returncode}'}",
                command=cmd,
                stderr=completed.stderr,
            )
        return parse_line_porcelain((completed.stdout or "").splitlines())


__all__ = ["GitBlameSource", "parse_line_porcelain"]
