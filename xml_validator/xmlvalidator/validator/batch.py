"""Batch validation of many files with per-file fault isolation."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from xmlvalidator.validator.diagnostics import could_not_process, make_diagnostic
from xmlvalidator.validator.models import (
    BatchSummary,
    ExcludedFile,
    Severity,
    ValidationOutcome,
    ValidationRequest,
)
from xmlvalidator.validator.pipeline import XmlValidationPipeline

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives outcomes as they are produced."""

    def start(self) -> None: ...

    def report(self, outcome: ValidationOutcome) -> None: ...

    def finish(self, summary: BatchSummary) -> None: ...


class BatchRunner:
    """Drive the pipeline over many requests, one at a time, in order."""

    def __init__(self, pipeline: XmlValidationPipeline, reporter: Reporter | None = None) -> None:
        self._pipeline = pipeline
        self._reporter = reporter
        self.summary = BatchSummary()

    def process_one(self, request: ValidationRequest) -> ValidationOutcome:
        """Validate one request; never raises."""
        try:
            outcome = self._pipeline.run(request)
        except Exception as e:
            logger.warning("Failed to process %s: %s", request.display_name, e, exc_info=True)
            outcome = ValidationOutcome(
                file=request.display_name,
                is_valid=False,
                diagnostics=[could_not_process(request.display_name, request.source, e)],
            )

        self._emit(outcome)
        return outcome

    def process_excluded(self, display_name: str) -> ValidationOutcome:
        """Report a file that is on the exclusion list; it is not counted."""
        outcome = ValidationOutcome(
            file=display_name,
            is_valid=True,
            diagnostics=[
                make_diagnostic(
                    display_name,
                    f'File "{display_name}" is not a schema-bearing document.',
                    severity=Severity.warning,
                )
            ],
            counted=False,
        )
        self._emit(outcome)
        return outcome

    def process(self, requests: Iterable[ValidationRequest | ExcludedFile]) -> BatchSummary:
        """Validate every request and return the counters.

        Excluded files are reported but not counted. Calls the reporter's
        ``start`` and ``finish`` hooks around the batch.
        """
        if self._reporter is not None:
            self._reporter.start()
        for request in requests:
            if isinstance(request, ExcludedFile):
                self.process_excluded(request.display_name)
            else:
                self.process_one(request)
        return self.finish()

    def finish(self) -> BatchSummary:
        if self._reporter is not None:
            self._reporter.finish(self.summary)
        return self.summary

    def _emit(self, outcome: ValidationOutcome) -> None:
        self.summary.record(outcome)
        if self._reporter is not None:
            self._reporter.report(outcome)
