# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are argument lists and never use a shell.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options.

    Output is always captured as text decoded with ``encoding``. ``errors`` is
    the codec error handler; git blame echoes source lines verbatim, so files
    that are not valid UTF-8 must not abort decoding.
    """

    cwd: Path | None = None
    encoding: str = "utf-8"
    errors: str = "replace"

    def with_cwd(self, cwd: Path | None) -> CommandOptions:
        """Return a copy of the options running in ``cwd``."""

        return replace(self, cwd=cwd)


def _normalize_args(args: Sequence[str], cwd: Path | None = None) -> list[str]:
    """Resolve the executable of ``args``.

    Executables given as a path are checked relative to ``cwd``; bare names
    are looked up on ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.
        cwd: Working directory the command will run in.

    Returns:
        list[str]: Argument list with the executable resolved.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute() or head_path.parent != Path():
        candidate = head_path if head_path.is_absolute() else (cwd or Path()) / head_path
        if not candidate.exists():
            raise FileNotFoundError(f"Executable '{head}' does not exist")
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    The exit status is returned, never raised; callers decide what a
    non-zero status means for their tool.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata with text output.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args, resolved_options.cwd)
    return subprocess.run(  # nosec B603 - argument list, no shell
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        check=False,
        capture_output=True,
        encoding=resolved_options.encoding,
        errors=resolved_options.errors,
    )


__all__ = ["CommandOptions", "run_command"]
