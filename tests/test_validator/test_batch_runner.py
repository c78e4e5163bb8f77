"""Tests for batch validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from xmlvalidator.validator.batch import BatchRunner
from xmlvalidator.validator.models import (
    BatchSummary,
    ExcludedFile,
    Severity,
    ValidationOutcome,
    ValidationRequest,
)
from xmlvalidator.validator.pipeline import XmlValidationPipeline
from xmlvalidator.validator.urn_resolver import UrnResolver


class RecordingReporter:
    def __init__(self) -> None:
        self.events: list[str] = []
        self.outcomes: list[ValidationOutcome] = []
        self.summary: BatchSummary | None = None

    def start(self) -> None:
        self.events.append("start")

    def report(self, outcome: ValidationOutcome) -> None:
        self.events.append(f"report:{outcome.file}")
        self.outcomes.append(outcome)

    def finish(self, summary: BatchSummary) -> None:
        self.events.append("finish")
        self.summary = summary


class ExplodingPipeline(XmlValidationPipeline):
    """Fails for one named file, delegates for the rest."""

    def __init__(self, urn_resolver: UrnResolver, fail_for: str) -> None:
        super().__init__(urn_resolver)
        self._fail_for = fail_for

    def run(self, request: ValidationRequest) -> ValidationOutcome:
        if request.display_name == self._fail_for:
            raise MemoryError("pathological document")
        return super().run(request)


def _request(fixtures_dir: Path, relative: str) -> ValidationRequest:
    return ValidationRequest(display_name=relative, path=fixtures_dir / relative)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


def test_single_valid_file(fixtures_dir: Path, urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([_request(fixtures_dir, "valid/module.xml")])
    assert summary.total_files == 1
    assert summary.valid_files == 1
    assert summary.exit_code == 0


def test_single_invalid_file(fixtures_dir: Path, urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([_request(fixtures_dir, "invalid/module.xml")])
    assert summary.total_files == 1
    assert summary.valid_files == 0
    assert summary.exit_code == 1


def test_mixed_files_keep_order(fixtures_dir: Path, urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([
        _request(fixtures_dir, "valid/module.xml"),
        _request(fixtures_dir, "invalid/module.xml"),
    ])
    assert summary.total_files == 2
    assert summary.valid_files == 1
    assert summary.exit_code == 1
    assert reporter.events == [
        "start",
        "report:valid/module.xml",
        "report:invalid/module.xml",
        "finish",
    ]
    assert reporter.summary is summary


def test_missing_file_does_not_abort_batch(
    fixtures_dir: Path, urn_resolver: UrnResolver, reporter,
) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([
        _request(fixtures_dir, "missing/nowhere.xml"),
        _request(fixtures_dir, "valid/module.xml"),
    ])
    assert summary.total_files == 2
    assert summary.valid_files == 1

    failed = reporter.outcomes[0]
    assert not failed.is_valid
    assert len(failed.diagnostics) == 1
    message = failed.diagnostics[0].message
    assert message.startswith(f"Could not process {fixtures_dir / 'missing/nowhere.xml'}. Error: ")
    assert failed.diagnostics[0].line == 0
    assert failed.diagnostics[0].file == "missing/nowhere.xml"


def test_unexpected_fault_is_contained(
    fixtures_dir: Path, urn_resolver: UrnResolver, reporter,
) -> None:
    runner = BatchRunner(ExplodingPipeline(urn_resolver, "valid/module.xml"), reporter)
    summary = runner.process([
        _request(fixtures_dir, "valid/module.xml"),
        _request(fixtures_dir, "valid/catalog.xml"),
    ])
    assert summary.total_files == 2
    assert summary.valid_files == 1
    assert "Error: pathological document" in reporter.outcomes[0].diagnostics[0].message


def test_in_memory_fault_names_display_name(urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(ExplodingPipeline(urn_resolver, "mem.xml"), reporter)
    runner.process([ValidationRequest(display_name="mem.xml", content=b"<a/>")])
    assert reporter.outcomes[0].diagnostics[0].message == (
        "Could not process mem.xml. Error: pathological document"
    )


def test_excluded_file_is_reported_but_not_counted(urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([ExcludedFile(display_name="phpunit.xml")])

    assert summary.total_files == 0
    assert summary.valid_files == 0
    assert summary.exit_code == 0
    warning = reporter.outcomes[0].diagnostics[0]
    assert warning.severity == Severity.warning
    assert warning.message == 'File "phpunit.xml" is not a schema-bearing document.'


def test_empty_batch(urn_resolver: UrnResolver, reporter) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    summary = runner.process([])
    assert summary.total_files == 0
    assert summary.exit_code == 0
    assert reporter.events == ["start", "finish"]


def test_runner_without_reporter(fixtures_dir: Path, urn_resolver: UrnResolver) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver))
    summary = runner.process([_request(fixtures_dir, "valid/config.xml")])
    assert summary.total_files == 1
    assert summary.valid_files == 1


def test_valid_never_exceeds_total(fixtures_dir: Path, urn_resolver: UrnResolver) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver))
    requests = [
        _request(fixtures_dir, name)
        for name in (
            "valid/module.xml",
            "valid/config.xml",
            "valid/catalog.xml",
            "invalid/module.xml",
            "invalid/malformed.xml",
        )
    ]
    summary = runner.process(requests)
    assert summary.valid_files <= summary.total_files
    assert summary.total_files == 5
    assert summary.valid_files == 3
    assert (summary.exit_code == 0) == (summary.valid_files == summary.total_files)


def test_broken_schema_becomes_could_not_process(
    fixtures_dir: Path, urn_resolver: UrnResolver, reporter,
) -> None:
    runner = BatchRunner(XmlValidationPipeline(urn_resolver), reporter)
    content = (
        b'<config xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        b'xsi:noNamespaceSchemaLocation="urn:acme:broken:etc/broken.xsd"/>'
    )
    outcome = runner.process_one(ValidationRequest(display_name="x.xml", content=content))

    assert not outcome.is_valid
    assert runner.summary.total_files == 1
    assert runner.summary.valid_files == 0
    [diagnostic] = outcome.diagnostics
    assert diagnostic.message.startswith(
        "Could not process x.xml. Error: Cannot load schema broken/etc/broken.xsd: "
    )
    assert str(fixtures_dir) not in diagnostic.message
