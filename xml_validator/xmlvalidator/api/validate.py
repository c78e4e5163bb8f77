"""POST /api/validate endpoint."""

from __future__ import annotations

import logging
import threading

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from xmlvalidator.config import ValidatorSettings
from xmlvalidator.deps import get_pipeline, get_settings
from xmlvalidator.reporting.summary import format_summary
from xmlvalidator.validator.batch import BatchRunner
from xmlvalidator.validator.models import (
    BatchSummary,
    Diagnostic,
    OutcomeStatus,
    ValidationOutcome,
    ValidationRequest,
)
from xmlvalidator.validator.pipeline import XmlValidationPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])

MAX_DOCUMENTS = 500

# The shared SchemaValidator cache is not thread-safe
_pipeline_lock = threading.Lock()


class DocumentIn(BaseModel):
    display_name: str = Field(..., min_length=1, description="Name used in diagnostics")
    content: str = Field(..., description="Raw XML text")


class ValidateRequest(BaseModel):
    """Request body for POST /api/validate."""

    documents: list[DocumentIn] = Field(..., min_length=1, max_length=MAX_DOCUMENTS)


class OutcomeItem(BaseModel):
    file: str
    status: OutcomeStatus
    is_valid: bool
    counted: bool = True
    schema_identifier: str | None = None
    schema_path: str | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class SummaryItem(BaseModel):
    total_files: int = 0
    valid_files: int = 0
    exit_code: int = 0
    message: str = ""


class ValidateResponse(BaseModel):
    """Response body for POST /api/validate."""

    summary: SummaryItem
    outcomes: list[OutcomeItem] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    project_root: str = ""


class _CollectingReporter:
    """Keeps outcomes in order for the response body."""

    def __init__(self) -> None:
        self.outcomes: list[ValidationOutcome] = []

    def start(self) -> None:
        pass

    def report(self, outcome: ValidationOutcome) -> None:
        self.outcomes.append(outcome)

    def finish(self, summary: BatchSummary) -> None:
        pass


def _to_item(outcome: ValidationOutcome) -> OutcomeItem:
    ref = outcome.schema_ref
    return OutcomeItem(
        file=outcome.file,
        status=outcome.status,
        is_valid=outcome.is_valid,
        counted=outcome.counted,
        schema_identifier=ref.identifier if ref else None,
        schema_path=(ref.display_path or None) if ref else None,
        diagnostics=outcome.diagnostics,
    )


@router.post("/validate", response_model=ValidateResponse)
def validate_documents(
    body: ValidateRequest,
    pipeline: XmlValidationPipeline = Depends(get_pipeline),
) -> ValidateResponse:
    """Validate each posted document against the schema it declares.

    A plain ``def`` so FastAPI runs the lxml work in its threadpool instead of
    on the event loop; batches are serialized on one lock.
    """
    reporter = _CollectingReporter()
    runner = BatchRunner(pipeline, reporter)
    with _pipeline_lock:
        summary = runner.process(
            ValidationRequest(display_name=doc.display_name, content=doc.content.encode("utf-8"))
            for doc in body.documents
        )
    logger.info("Validated %d documents: %s", len(body.documents), format_summary(summary))

    return ValidateResponse(
        summary=SummaryItem(
            total_files=summary.total_files,
            valid_files=summary.valid_files,
            exit_code=summary.exit_code,
            message=format_summary(summary),
        ),
        outcomes=[_to_item(o) for o in reporter.outcomes],
    )


@router.get("/health", response_model=HealthResponse)
async def health(settings: ValidatorSettings = Depends(get_settings)) -> HealthResponse:
    """Liveness check that also shows which project root schemas resolve against."""
    return HealthResponse(project_root=settings.project_root.as_posix())
