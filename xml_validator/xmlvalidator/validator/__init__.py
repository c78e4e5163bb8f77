"""Schema validation pipeline for XML files."""

from xmlvalidator.validator.batch import BatchRunner, Reporter
from xmlvalidator.validator.errors import ResolutionError, SchemaError, SchemaLoadError
from xmlvalidator.validator.models import (
    BatchSummary,
    Diagnostic,
    ExcludedFile,
    NoSchemaPolicy,
    OutcomeStatus,
    SchemaReference,
    Severity,
    ValidationOutcome,
    ValidationRequest,
)
from xmlvalidator.validator.pipeline import XmlValidationPipeline
from xmlvalidator.validator.urn_resolver import UrnResolver
from xmlvalidator.validator.xsd_schema import SchemaValidator

__all__ = [
    "BatchRunner",
    "BatchSummary",
    "Diagnostic",
    "ExcludedFile",
    "NoSchemaPolicy",
    "OutcomeStatus",
    "Reporter",
    "ResolutionError",
    "SchemaError",
    "SchemaLoadError",
    "SchemaReference",
    "SchemaValidator",
    "Severity",
    "UrnResolver",
    "ValidationOutcome",
    "ValidationRequest",
    "XmlValidationPipeline",
]
