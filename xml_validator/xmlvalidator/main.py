"""FastAPI application -- XML validation as a service."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import xmlvalidator.deps as deps
from xmlvalidator.api.validate import router as validate_router
from xmlvalidator.config import VERSION, load_settings
from xmlvalidator.validator.pipeline import XmlValidationPipeline
from xmlvalidator.validator.xsd_schema import SchemaValidator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the pipeline on startup, drop it on shutdown."""
    log_level = logging.DEBUG if os.environ.get("XMLVALIDATOR_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    deps._settings = load_settings()
    logger.info(
        "XML Validator starting: project root %s, %d components, %d modules",
        deps._settings.project_root,
        len(deps._settings.components),
        len(deps._settings.modules),
    )

    urn_resolver = deps._settings.build_urn_resolver()
    deps._pipeline = XmlValidationPipeline(
        urn_resolver,
        SchemaValidator(urn_resolver),
        no_schema_policy=deps._settings.no_schema_policy,
    )

    yield

    deps._pipeline = None
    deps._settings = None


app = FastAPI(
    title="XML Validator",
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(validate_router)
