"""Validation data models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity level for diagnostics."""

    error = "error"
    warning = "warning"


class OutcomeStatus(str, Enum):
    """Overall status of a single file, as shown by reporters."""

    valid = "valid"
    warning = "warning"
    invalid = "invalid"


class NoSchemaPolicy(str, Enum):
    """How a well-formed file without a schema declaration is counted."""

    valid = "valid"
    invalid = "invalid"
    skip = "skip"


class Diagnostic(BaseModel):
    """A single problem found while parsing or validating one file."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = Field(0, ge=0)
    message: str
    severity: Severity = Severity.error


class ValidationRequest(BaseModel):
    """One file to validate: either an in-memory buffer or a path read on demand."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    content: bytes | None = None
    path: Path | None = None

    @property
    def source(self) -> str:
        """The path as given, or the display name for in-memory buffers."""
        return str(self.path) if self.path is not None else self.display_name

    def load_content(self) -> bytes:
        """Return the buffer, reading it from ``path`` if it was not supplied."""
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"No content or path given for {self.display_name}")
        return self.path.read_bytes()


class ExcludedFile(BaseModel):
    """A path on the exclusion list that was named explicitly."""

    model_config = ConfigDict(frozen=True)

    display_name: str


class SchemaReference(BaseModel):
    """Schema identifier found in a document and where it resolved to."""

    identifier: str
    resolved_path: Path | None = None
    display_path: str = ""


class ValidationOutcome(BaseModel):
    """Terminal result for one file."""

    file: str
    is_valid: bool
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    schema_ref: SchemaReference | None = None
    counted: bool = True

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.warning]

    @property
    def status(self) -> OutcomeStatus:
        if not self.is_valid or self.errors:
            return OutcomeStatus.invalid
        if self.warnings:
            return OutcomeStatus.warning
        return OutcomeStatus.valid


class BatchSummary(BaseModel):
    """Counters for one command invocation."""

    total_files: int = 0
    valid_files: int = 0

    def record(self, outcome: ValidationOutcome) -> None:
        if not outcome.counted:
            return
        self.total_files += 1
        if outcome.is_valid:
            self.valid_files += 1

    @property
    def success(self) -> bool:
        return self.valid_files == self.total_files

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
