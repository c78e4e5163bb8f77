"""Command line entrypoint — `xmlvalidator xml:validate PATHS...`."""

import logging
import os
from typing import List

import typer
from rich.console import Console

from xmlvalidator.config import VERSION, ConfigError, load_settings
from xmlvalidator.discovery import discover_files
from xmlvalidator.reporting import AnnotationReporter, ConsoleReporter
from xmlvalidator.validator import BatchRunner, SchemaValidator, XmlValidationPipeline

COMMAND_NAME = "xml:validate"

app = typer.Typer(help="Validate XML files against the XSD schema each one declares.")
logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    log_level = logging.DEBUG if os.environ.get("XMLVALIDATOR_DEV_MODE") else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.callback()
def main() -> None:
    """XML schema validation tools."""


@app.command()
def version() -> None:
    """Print CLI version."""
    typer.echo(VERSION)


@app.command(COMMAND_NAME)
def validate_xml(
    paths: List[str] = typer.Argument(..., help="List of files or directories to validate"),
) -> None:
    """Validates an XML file against its configured schema."""
    _configure_logging()

    try:
        settings = load_settings()
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    if settings.ci_annotations:
        reporter = AnnotationReporter()
    else:
        reporter = ConsoleReporter(Console(highlight=False))

    urn_resolver = settings.build_urn_resolver()
    pipeline = XmlValidationPipeline(
        urn_resolver,
        SchemaValidator(urn_resolver),
        no_schema_policy=settings.no_schema_policy,
    )
    runner = BatchRunner(pipeline, reporter)

    logger.debug("Validating %s (project root %s)", paths, settings.project_root)
    summary = runner.process(
        discover_files(paths, settings.project_root, settings.excluded_files)
    )

    raise typer.Exit(code=summary.exit_code)


if __name__ == "__main__":
    app()
