"""Diagnostic normalisation shared by every pipeline stage and reporter."""

from __future__ import annotations

import re

from xmlvalidator.validator.models import Diagnostic, Severity

# "Line 12: " as produced by format_line_message
LINE_PREFIX_RE = re.compile(r"^Line \d+:\s")


def strip_line_prefix(message: str) -> str:
    """Remove one leading ``Line <n>: `` prefix, if present."""
    return LINE_PREFIX_RE.sub("", message, count=1)


def format_line_message(line: int | None, message: str) -> str:
    """Render ``Line <n>: <message>`` with exactly one prefix and no trailing newline."""
    bare = message.rstrip("\r\n")
    while LINE_PREFIX_RE.match(bare):
        bare = strip_line_prefix(bare)
    return f"Line {max(line or 0, 0)}: {bare}"


def make_diagnostic(
    file: str,
    message: str,
    line: int | None = 0,
    severity: Severity = Severity.error,
) -> Diagnostic:
    """Build a Diagnostic, defaulting the line to 0 and stripping trailing newlines."""
    return Diagnostic(
        file=file,
        line=max(line or 0, 0),
        message=message.rstrip("\r\n"),
        severity=severity,
    )


def could_not_process(file: str, source: str, error: Exception) -> Diagnostic:
    """The single error reported when a file cannot be taken through the pipeline."""
    return make_diagnostic(file, f"Could not process {source}. Error: {error}")


def escape_annotation(message: str) -> str:
    """Percent-encode a message so it fits on one workflow-command line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
