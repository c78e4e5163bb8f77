"""Exceptions raised while locating or loading schemas."""

from __future__ import annotations


class SchemaError(Exception):
    """Base class for schema problems that make a single file unprocessable."""


class ResolutionError(SchemaError):
    """A schema identifier does not map to a readable schema file."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Cannot resolve schema '{identifier}': {reason}")
        self.identifier = identifier
        self.reason = reason


class SchemaLoadError(SchemaError):
    """A schema file exists but cannot be read or compiled."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load schema {path}: {reason}")
        self.path = path
        self.reason = reason
