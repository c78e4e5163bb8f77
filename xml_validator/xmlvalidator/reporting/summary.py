"""Summary line formatting."""

from __future__ import annotations

from typing import Callable

from xmlvalidator.validator.models import BatchSummary

SummaryFormatter = Callable[[BatchSummary], str]


def format_summary(summary: BatchSummary) -> str:
    """``1 of 1 file is valid`` / ``1 of 2 files are valid``."""
    if summary.total_files == 1:
        noun = "file is"
    else:
        noun = "files are"
    return f"{summary.valid_files} of {summary.total_files} {noun} valid"
