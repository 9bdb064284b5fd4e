# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point."""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Annotated

import typer

from . import workflow
from .aggregator import DecisionAggregator
from .config import RunConfig, load_run_config
from .discovery import DEFAULT_PATTERNS, ChangedFileDiscovery
from .errors import PhpcsBlameError
from .logging import fail, info, ok
from .reporting import AnnotationReporter
from .runner import run_on_blame
from .sources import GitBlameSource, PhpcsSource

app = typer.Typer(help="Report phpcs findings only on lines changed by a pull request.", no_args_is_help=True)


@app.callback()
def main() -> None:
    """Report phpcs findings only on lines changed by a pull request."""


@app.command("run")
def run_cmd(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Files to lint. Defaults to the files the pull request changed."),
    ] = None,
    phpcs_path: Annotated[
        str | None,
        typer.Option("--phpcs-path", envvar=workflow.input_env_name("phpcs_path"), help="Path to the phpcs executable."),
    ] = None,
    standard: Annotated[
        str | None,
        typer.Option("--standard", envvar=workflow.input_env_name("standard"), help="Coding standard passed to phpcs."),
    ] = None,
    fail_on_warnings: Annotated[
        str | None,
        typer.Option(
            "--fail-on-warnings",
            envvar=workflow.input_env_name("fail_on_warnings"),
            help="Fail on new warnings unless set to 'false' or 'off'.",
        ),
    ] = None,
    base_sha: Annotated[
        str | None,
        typer.Option("--base-sha", help="Base revision of the change; read from the event payload when omitted."),
    ] = None,
    event_path: Annotated[
        Path | None,
        typer.Option("--event-path", envvar=workflow.EVENT_PATH_ENV, help="Pull request event payload."),
    ] = None,
    jobs: Annotated[int, typer.Option("--jobs", "-j", min=1, help="Concurrent git blame processes.")] = 1,
    patterns: Annotated[
        list[str] | None,
        typer.Option("--pattern", help="Glob for discovered files; repeatable. Defaults to '*.php'."),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", file_okay=False, help="Repository root; defaults to the current directory."),
    ] = None,
    use_emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Use emoji in status lines.")] = True,
) -> None:
    """Lint files and annotate only the findings the change introduced.

    Raises:
        typer.Exit: Always raised with the run's exit status.
    """

    try:
        config = load_run_config(
            phpcs_path=phpcs_path,
            standard=standard,
            fail_on_warnings=fail_on_warnings,
            base_sha=base_sha,
            event_path=event_path,
            jobs=jobs,
            root=(root or Path.cwd()).resolve(),
        )
        if files:
            targets = list(files)
        else:
            discovery = ChangedFileDiscovery()
            targets = discovery.discover(config.base_revision, config.root, patterns or DEFAULT_PATTERNS)
    except PhpcsBlameError as exc:
        workflow.debug(traceback.format_exc())
        workflow.error(str(exc))
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc

    if not targets:
        ok("No files to lint", use_emoji=use_emoji)
        raise typer.Exit(code=0)
    raise typer.Exit(code=_run(targets, config, use_emoji=use_emoji))


def _run(targets: list[str], config: RunConfig, *, use_emoji: bool) -> int:
    """Run the filter over ``targets`` and return the exit status."""

    aggregator = DecisionAggregator(fail_on_warnings=config.fail_on_warnings, on_failure=workflow.error)
    outcome = run_on_blame(
        targets,
        config,
        diagnostics=PhpcsSource(cwd=config.root),
        provenance=GitBlameSource(cwd=config.root),
        reporter=AnnotationReporter(emit=typer.echo, debug=workflow.debug, root=config.root),
        aggregator=aggregator,
        debug=workflow.debug,
    )
    if aggregator.short_circuit_reason:
        info(aggregator.short_circuit_reason, use_emoji=use_emoji)
    if outcome.should_fail:
        fail(f"phpcs found {len(outcome.failure_reasons)} problem(s) on changed lines", use_emoji=use_emoji)
        return 1
    ok("No phpcs problems on changed lines", use_emoji=use_emoji)
    return 0


__all__ = ["app"]
