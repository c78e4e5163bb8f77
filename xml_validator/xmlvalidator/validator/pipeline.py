"""Validation pipeline — runs every stage for one file in sequence."""

from __future__ import annotations

import logging

from xmlvalidator.validator.diagnostics import could_not_process, make_diagnostic
from xmlvalidator.validator.errors import SchemaError
from xmlvalidator.validator.models import (
    NoSchemaPolicy,
    SchemaReference,
    Severity,
    ValidationOutcome,
    ValidationRequest,
)
from xmlvalidator.validator.schema_declaration import (
    extract_schema_identifier,
    schema_identifier_from_tree,
)
from xmlvalidator.validator.urn_resolver import UrnResolver
from xmlvalidator.validator.xml_syntax import check_xml_syntax
from xmlvalidator.validator.xsd_schema import SchemaValidator

logger = logging.getLogger(__name__)


class XmlValidationPipeline:
    """Parse, find the declared schema, resolve it and validate one document."""

    def __init__(
        self,
        urn_resolver: UrnResolver,
        schema_validator: SchemaValidator | None = None,
        no_schema_policy: NoSchemaPolicy = NoSchemaPolicy.valid,
    ) -> None:
        self.urn_resolver = urn_resolver
        self.schema_validator = schema_validator or SchemaValidator(urn_resolver)
        self.no_schema_policy = no_schema_policy

    def run(self, request: ValidationRequest) -> ValidationOutcome:
        """Run the full pipeline on one request.

        Order: 1. schema declaration scan → 2. XML syntax → 3. URN resolution → 4. XSD validation.
        Each failing step returns immediately. Unexpected exceptions propagate to
        the caller.
        """
        file = request.display_name
        content = request.load_content()

        # Step 1: textual scan, independent of whether the document parses
        identifier = extract_schema_identifier(content)

        # Step 2: well-formedness
        syntax = check_xml_syntax(content, file)
        if not syntax.ok:
            return ValidationOutcome(file=file, is_valid=False, diagnostics=syntax.diagnostics)

        if identifier is None:
            # Text scan misses declarations in non-UTF-8 documents
            identifier = schema_identifier_from_tree(syntax.document)
        if identifier is None:
            return self._no_schema_outcome(file)

        # Step 3: locate the schema
        schema_ref = SchemaReference(identifier=identifier)
        try:
            schema_path = self.urn_resolver.resolve(identifier)
            schema_ref.resolved_path = schema_path
            schema_ref.display_path = self.urn_resolver.display_path(schema_path)

            # Step 4: structural validation
            diagnostics = self.schema_validator.validate(syntax.document, schema_path, file)
        except SchemaError as e:
            logger.info("Schema problem for %s: %s", file, e)
            return ValidationOutcome(
                file=file,
                is_valid=False,
                diagnostics=[could_not_process(file, request.source, e)],
                schema_ref=schema_ref,
            )

        return ValidationOutcome(
            file=file,
            is_valid=not diagnostics,
            diagnostics=diagnostics,
            schema_ref=schema_ref,
        )

    def _no_schema_outcome(self, file: str) -> ValidationOutcome:
        warning = make_diagnostic(
            file,
            f'XML file "{file}" does not have a schema defined',
            severity=Severity.warning,
        )
        return ValidationOutcome(
            file=file,
            is_valid=self.no_schema_policy != NoSchemaPolicy.invalid,
            diagnostics=[warning],
            counted=self.no_schema_policy != NoSchemaPolicy.skip,
        )
