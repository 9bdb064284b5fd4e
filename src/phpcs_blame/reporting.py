# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render classified diagnostics as checkstyle-like annotation lines.

New findings go to the primary channel where a CI problem matcher turns them
into annotations. Inherited findings go to the debug channel so they can be
audited without producing annotations. The format only opens a ``<file>``
element and never closes it; the matcher does not need the close tag.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from .models import ClassifiedDiagnostic, Diagnostic

LineSink = Callable[[str], None]

FILE_MARKER_TEMPLATE = '<file name="{name}">'
ERROR_LINE_TEMPLATE = '<error line="{line}" column="{column}" severity="{severity}" message="{message}" source="{source}"/>'


def format_file_marker(file: str, root: Path) -> str:
    """Return the ``<file>`` open marker for ``file`` relative to ``root``."""

    path = Path(file)
    if not path.is_absolute():
        path = root / path
    return FILE_MARKER_TEMPLATE.format(name=os.path.relpath(path, root))


def format_error_line(diagnostic: Diagnostic) -> str:
    """Return the ``<error/>`` line describing ``diagnostic``."""

    return ERROR_LINE_TEMPLATE.format(
        line=diagnostic.line,
        column=diagnostic.column,
        severity=diagnostic.severity.value,
        message=diagnostic.message,
        source=diagnostic.source,
    )


class AnnotationReporter:
    """Write each file's classified diagnostics to the primary and debug sinks."""

    def __init__(self, *, emit: LineSink, debug: LineSink, root: Path) -> None:
        """Create a reporter.

        Args:
            emit: Sink for the annotation stream scraped by the problem matcher.
            debug: Sink for suppressed findings; never scraped for annotations.
            root: Working directory file names are made relative to.
        """

        self._emit = emit
        self._debug = debug
        self._root = root
        self._marker = ""
        self._header_printed = False

    def start_file(self, file: str) -> None:
        """Begin reporting diagnostics of ``file``; its marker is printed lazily."""

        self._marker = format_file_marker(file, self._root)
        self._header_printed = False

    def report_diagnostic(self, item: ClassifiedDiagnostic) -> None:
        """Report one diagnostic of the file passed to :meth:`start_file`.

        New findings go to the primary sink, preceded by the file marker the
        first time. Inherited findings go to the debug sink with the marker.
        """

        line = format_error_line(item.diagnostic)
        if item.is_new:
            if not self._header_printed:
                self._emit(self._marker)
                self._header_printed = True
            self._emit(line)
        else:
            self._debug(self._marker)
            self._debug(line)

    def report(self, file: str, classified: Iterable[ClassifiedDiagnostic]) -> None:
        """Report ``classified`` for ``file`` in the order given.

        Args:
            file: Path of the file the diagnostics belong to.
            classified: Diagnostics of ``file`` paired with their change status.
        """

        self.start_file(file)
        for item in classified:
            self.report_diagnostic(item)


__all__ = [
    "AnnotationReporter",
    "LineSink",
    "format_error_line",
    "format_file_marker",
]
