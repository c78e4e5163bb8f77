"""XSD loading and structural validation using lxml."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from xmlvalidator.validator.diagnostics import format_line_message, make_diagnostic
from xmlvalidator.validator.errors import SchemaLoadError
from xmlvalidator.validator.models import Diagnostic
from xmlvalidator.validator.urn_resolver import UrnResolver, UrnSchemaResolver
from xmlvalidator.validator.xml_syntax import new_parser

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Compiles schemas once per path and validates parsed documents against them."""

    def __init__(self, urn_resolver: UrnResolver | None = None) -> None:
        self._urn_resolver = urn_resolver
        self._schemas: dict[Path, etree.XMLSchema] = {}

    def load(self, schema_path: Path) -> etree.XMLSchema:
        """Return the compiled schema, raising SchemaLoadError if it is unusable."""
        schema_path = schema_path.resolve()
        cached = self._schemas.get(schema_path)
        if cached is not None:
            return cached

        resolvers = [UrnSchemaResolver(self._urn_resolver)] if self._urn_resolver else []
        parser = new_parser(resolvers)
        shown = self.display_path(schema_path)

        try:
            schema_doc = etree.parse(str(schema_path), parser)
        except OSError as e:
            raise SchemaLoadError(shown, self._scrub(str(e), schema_path)) from e
        except etree.XMLSyntaxError as e:
            raise SchemaLoadError(
                shown, f"not well-formed: {self._scrub(str(e), schema_path)}"
            ) from e

        try:
            schema = etree.XMLSchema(schema_doc)
        except etree.XMLSchemaParseError as e:
            raise SchemaLoadError(
                shown, f"invalid schema: {self._scrub(str(e), schema_path)}"
            ) from e

        logger.debug("Compiled schema %s", schema_path)
        self._schemas[schema_path] = schema
        return schema

    def display_path(self, schema_path: Path) -> str:
        if self._urn_resolver is not None:
            return self._urn_resolver.display_path(schema_path)
        return schema_path.as_posix()

    def _scrub(self, text: str, schema_path: Path) -> str:
        """Replace the absolute schema location in lxml messages with the display path."""
        shown = self.display_path(schema_path)
        for raw in (schema_path.as_uri(), str(schema_path), schema_path.as_posix()):
            text = text.replace(raw, shown)
        return text

    def validate(
        self, document: etree._ElementTree, schema_path: Path, file: str,
    ) -> list[Diagnostic]:
        """Validate a parsed document; an empty list means it conforms."""
        schema = self.load(schema_path)
        if schema.validate(document):
            return []

        return [
            make_diagnostic(file, format_line_message(entry.line, entry.message), line=entry.line)
            for entry in schema.error_log
        ]
