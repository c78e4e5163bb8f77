"""XML well-formedness checking using lxml."""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from xmlvalidator.validator.diagnostics import format_line_message, make_diagnostic
from xmlvalidator.validator.models import Diagnostic


@dataclass
class XmlSyntaxResult:
    """Parsed document plus any well-formedness errors."""

    document: etree._ElementTree | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.diagnostics


def new_parser(resolvers: list[etree.Resolver] | None = None) -> etree.XMLParser:
    """Create a fresh parser so each parse gets its own error log."""
    parser = etree.XMLParser(
        load_dtd=False,
        no_network=True,
        resolve_entities=False,
        huge_tree=True,
    )
    for resolver in resolvers or []:
        parser.resolvers.add(resolver)
    return parser


def check_xml_syntax(content: bytes | str, file: str) -> XmlSyntaxResult:
    """Parse XML and collect well-formedness errors instead of raising.

    Returns an XmlSyntaxResult with the parsed tree on success, or no tree and
    one error-level diagnostic per parser error on failure.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    if not content.strip():
        return XmlSyntaxResult(
            diagnostics=[make_diagnostic(file, format_line_message(0, "Document is empty"))],
        )

    parser = new_parser()
    document: etree._ElementTree | None
    try:
        root = etree.fromstring(content, parser)
        document = root.getroottree()
    except etree.XMLSyntaxError as e:
        document = None
        fallback = make_diagnostic(
            file, format_line_message(e.lineno, e.msg or str(e)), line=e.lineno
        )
    else:
        fallback = None

    diagnostics = [
        make_diagnostic(file, format_line_message(entry.line, entry.message), line=entry.line)
        for entry in parser.error_log
        if entry.level >= etree.ErrorLevels.ERROR
    ]

    # lxml always logs the failing entry, but keep the exception text if it did not
    if document is None and not diagnostics and fallback is not None:
        diagnostics.append(fallback)

    if diagnostics:
        return XmlSyntaxResult(diagnostics=diagnostics)
    return XmlSyntaxResult(document=document)
