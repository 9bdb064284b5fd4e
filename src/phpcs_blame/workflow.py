# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub Actions context: action inputs, event payload and workflow commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Final

import typer
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError

EVENT_PATH_ENV: Final[str] = "GITHUB_EVENT_PATH"
INPUT_ENV_PREFIX: Final[str] = "INPUT_"


def input_env_name(name: str) -> str:
    """Return the environment variable GitHub uses for action input ``name``."""

    return f"{INPUT_ENV_PREFIX}{name.replace(' ', '_').upper()}"


def escape_data(value: str) -> str:
    """Escape ``value`` for use as workflow command data."""

    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def debug(message: str) -> None:
    """Write ``message`` to the debug log, shown only when step debugging is on."""

    for line in message.splitlines() or [""]:
        typer.echo(f"::debug::{escape_data(line)}")


def error(message: str) -> None:
    """Write ``message`` as an error annotation."""

    typer.echo(f"::error::{escape_data(message)}")


class _Base(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sha: str

    @field_validator("sha")
    @classmethod
    def _require_sha(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("base sha is empty")
        return value.strip()


class _PullRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base: _Base


class _PullRequestEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pull_request: _PullRequest


def base_sha_from_payload(payload: object) -> str:
    """Return ``pull_request.base.sha`` from a webhook event payload.

    Raises:
        ConfigurationError: If the payload is not a pull request event.
    """

    try:
        return _PullRequestEvent.model_validate(payload).pull_request.base.sha
    except ValidationError as exc:
        raise ConfigurationError(f"Event payload has no pull_request.base.sha: {exc}") from exc


def load_base_sha(event_path: Path | None) -> str:
    """Read the pull request base SHA from the event payload file at ``event_path``.

    Args:
        event_path: Path of the JSON payload, usually ``$GITHUB_EVENT_PATH``.

    Returns:
        str: Base revision of the pull request.

    Raises:
        ConfigurationError: If the file is missing or malformed.
    """

    if event_path is None:
        raise ConfigurationError(f"No event payload available; set {EVENT_PATH_ENV} or pass --base-sha")
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read event payload {event_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Event payload {event_path} is not valid JSON: {exc}") from exc
    return base_sha_from_payload(payload)


__all__ = [
    "EVENT_PATH_ENV",
    "base_sha_from_payload",
    "debug",
    "error",
    "escape_data",
    "input_env_name",
    "load_base_sha",
]
