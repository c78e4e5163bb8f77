"""Shared FastAPI dependencies."""

from __future__ import annotations

from xmlvalidator.config import ValidatorSettings
from xmlvalidator.validator.pipeline import XmlValidationPipeline

_settings: ValidatorSettings | None = None
_pipeline: XmlValidationPipeline | None = None


def get_settings() -> ValidatorSettings:
    """FastAPI dependency: return the loaded ValidatorSettings."""
    assert _settings is not None, "Settings not initialised"
    return _settings


def get_pipeline() -> XmlValidationPipeline:
    """FastAPI dependency: return the shared XmlValidationPipeline."""
    assert _pipeline is not None, "Pipeline not initialised"
    return _pipeline
