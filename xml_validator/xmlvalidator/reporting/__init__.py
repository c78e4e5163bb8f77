"""Reporters for batch validation output."""

from xmlvalidator.reporting.annotations import AnnotationReporter, format_annotation
from xmlvalidator.reporting.console import ConsoleReporter
from xmlvalidator.reporting.summary import SummaryFormatter, format_summary

__all__ = [
    "AnnotationReporter",
    "ConsoleReporter",
    "SummaryFormatter",
    "format_annotation",
    "format_summary",
]
