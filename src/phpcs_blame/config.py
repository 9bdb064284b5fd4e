# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run configuration assembled once at start-up.

``fail_on_warnings`` is a free-form action input. It is disabled only by the
exact, case-sensitive strings ``"false"`` and ``"off"``; any other value,
including an empty or missing one, enables it. ``"False"`` or ``"no"`` keep
warnings fatal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .workflow import load_base_sha

FAIL_ON_WARNINGS_FALSE: Final[str] = "false"
FAIL_ON_WARNINGS_OFF: Final[str] = "off"
FAIL_ON_WARNINGS_DISABLED_VALUES: Final[frozenset[str]] = frozenset({FAIL_ON_WARNINGS_FALSE, FAIL_ON_WARNINGS_OFF})


def parse_fail_on_warnings(raw: str | None) -> bool:
    """Return whether new warnings should fail the run for input value ``raw``."""

    return raw not in FAIL_ON_WARNINGS_DISABLED_VALUES


class RunConfig(BaseModel):
    """Inputs that stay constant for the whole run."""

    model_config = ConfigDict(frozen=True)

    phpcs_path: Path
    standard: str | None = None
    fail_on_warnings: bool = True
    base_revision: str = Field(min_length=1)
    jobs: int = Field(default=1, ge=1)
    root: Path = Field(default_factory=Path.cwd)

    @property
    def blame_range(self) -> str:
        """Return the open-ended revision range handed to git blame."""

        return f"{self.base_revision}.."

    def lint_options(self) -> dict[str, str]:
        """Return the pass-through options for phpcs."""

        options: dict[str, str] = {}
        if self.standard:
            options["standard"] = self.standard
        return options


def load_run_config(
    *,
    phpcs_path: str | Path | None,
    standard: str | None = None,
    fail_on_warnings: str | None = None,
    base_sha: str | None = None,
    event_path: Path | None = None,
    jobs: int = 1,
    root: Path | None = None,
) -> RunConfig:
    """Resolve raw CLI/environment values into a :class:`RunConfig`.

    Args:
        phpcs_path: Path to the phpcs executable. Required.
        standard: Optional coding standard passed to phpcs.
        fail_on_warnings: Raw ``fail_on_warnings`` input value.
        base_sha: Explicit base revision; wins over ``event_path``.
        event_path: Pull request event payload holding ``pull_request.base.sha``.
        jobs: Number of concurrent blame fetches.
        root: Working directory paths are reported relative to.

    Returns:
        RunConfig: Validated configuration.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """

    if phpcs_path is None or not str(phpcs_path).strip():
        raise ConfigurationError("Input required and not supplied: phpcs_path")
    base_revision = base_sha.strip() if base_sha and base_sha.strip() else load_base_sha(event_path)
    try:
        return RunConfig(
            phpcs_path=Path(str(phpcs_path).strip()),
            standard=standard.strip() if standard and standard.strip() else None,
            fail_on_warnings=parse_fail_on_warnings(fail_on_warnings),
            base_revision=base_revision,
            jobs=jobs,
            root=root or Path.cwd(),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "FAIL_ON_WARNINGS_DISABLED_VALUES",
    "RunConfig",
    "load_run_config",
    "parse_fail_on_warnings",
]
