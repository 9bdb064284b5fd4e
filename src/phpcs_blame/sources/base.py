# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command runner shared by the subprocess-backed sources."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess

from ..errors import ExternalToolError
from ..process import CommandOptions, run_command

CommandRunner = Callable[[Sequence[str], Path | None], CompletedProcess[str]]


def default_runner(cmd: Sequence[str], cwd: Path | None) -> CompletedProcess[str]:
    """Run ``cmd`` capturing text output without raising on a non-zero exit.

    Args:
        cmd: Command to execute.
        cwd: Working directory, or ``None`` for the current one.

    Returns:
        CompletedProcess[str]: Completed process metadata.

    Raises:
        ExternalToolError: If the executable cannot be found or started.
    """

    try:
        return run_command(cmd, options=CommandOptions().with_cwd(cwd))
    except (FileNotFoundError, PermissionError) as exc:
        raise ExternalToolError(str(exc), command=cmd) from exc


__all__ = ["CommandRunner", "default_runner"]
