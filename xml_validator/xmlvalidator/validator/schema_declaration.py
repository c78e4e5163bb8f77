"""Schema declaration lookup on the raw document text or the parsed root."""

from __future__ import annotations

import re

from lxml import etree

# xsi:noNamespaceSchemaLocation="urn:vendor:component:path/to/schema.xsd"
SCHEMA_LOCATION_RE = re.compile(
    r'xsi:noNamespaceSchemaLocation\s*=\s*"(urn:[^"]+)"', re.DOTALL
)

SCHEMA_LOCATION_ATTR = "{http://www.w3.org/2001/XMLSchema-instance}noNamespaceSchemaLocation"


def extract_schema_identifier(content: bytes | str) -> str | None:
    """Return the first URN declared via xsi:noNamespaceSchemaLocation.

    Works on the raw text so it still answers for documents that do not parse.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    match = SCHEMA_LOCATION_RE.search(content)
    if match:
        return match.group(1)
    return None


def schema_identifier_from_tree(document: etree._ElementTree | None) -> str | None:
    """Read the URN from the parsed root element, whatever the source encoding."""
    if document is None:
        return None
    location = document.getroot().get(SCHEMA_LOCATION_ATTR)
    if location and location.strip().startswith("urn:"):
        return location.strip()
    return None
