"""Human-readable console output using rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from xmlvalidator.reporting.summary import SummaryFormatter, format_summary
from xmlvalidator.validator.models import BatchSummary, ValidationOutcome

TITLE = "XML Validator"


class ConsoleReporter:
    """Prints one titled block per file and a closing tally."""

    def __init__(
        self,
        console: Console | None = None,
        formatter: SummaryFormatter = format_summary,
    ) -> None:
        self._console = console or Console(highlight=False)
        self._formatter = formatter

    def _print(self, text: str) -> None:
        self._console.print(text, soft_wrap=True, highlight=False)

    def start(self) -> None:
        self._print(f"[bold green]{escape(TITLE)}[/bold green]")
        self._print(f"[green]{'=' * len(TITLE)}[/green]")
        self._console.line()

    def report(self, outcome: ValidationOutcome) -> None:
        if outcome.schema_ref is not None and outcome.schema_ref.display_path:
            self._print(
                f" Validating {escape(outcome.file)} against "
                f"{escape(outcome.schema_ref.display_path)}..."
            )
            self._console.line()

        errors = outcome.errors
        warnings = outcome.warnings

        if warnings:
            self._block("WARNING", "yellow", [d.message for d in warnings])
        if errors:
            self._block("ERROR", "red", ["Invalid XML. Errors:"] + [d.message for d in errors])
        if not errors and not warnings and outcome.is_valid:
            self._block("OK", "green", ["XML is valid."])

    def _block(self, label: str, colour: str, lines: list[str]) -> None:
        prefix = f" [{label}] "
        indent = " " * len(prefix)
        first, *rest = lines
        self._print(f"[{colour}]{escape(prefix)}{escape(first)}[/{colour}]")
        for line in rest:
            self._print(f"[{colour}]{indent}{escape(line)}[/{colour}]")
        self._console.line()

    def finish(self, summary: BatchSummary) -> None:
        self._print(escape(self._formatter(summary)))
