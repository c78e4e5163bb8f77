"""GitHub Actions workflow-command output (one annotation line per diagnostic)."""

from __future__ import annotations

import sys
from typing import TextIO

from xmlvalidator.reporting.summary import SummaryFormatter, format_summary
from xmlvalidator.validator.diagnostics import escape_annotation, strip_line_prefix
from xmlvalidator.validator.models import BatchSummary, Diagnostic, ValidationOutcome


def format_annotation(diagnostic: Diagnostic) -> str:
    """Render ``::<level> file=<path>,line=<n>,col=0::<message>``.

    The message loses its ``Line <n>: `` prefix and is terminated by an
    encoded newline.
    """
    message = escape_annotation(strip_line_prefix(diagnostic.message) + "\n")
    return (
        f"::{diagnostic.severity.value} file={diagnostic.file},"
        f"line={diagnostic.line},col=0::{message}"
    )


class AnnotationReporter:
    """Quiet reporter for CI: only annotations and the final tally are written."""

    def __init__(
        self,
        stream: TextIO | None = None,
        formatter: SummaryFormatter = format_summary,
    ) -> None:
        self._stream = stream
        self._formatter = formatter

    def _write(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")

    def start(self) -> None:
        pass

    def report(self, outcome: ValidationOutcome) -> None:
        for diagnostic in outcome.diagnostics:
            self._write(format_annotation(diagnostic))

    def finish(self, summary: BatchSummary) -> None:
        self._write(self._formatter(summary))
