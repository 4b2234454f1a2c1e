"""Pipeline error taxonomy: structural, schema, and corpus-level failures"""

from typing import Any


class MdsiteError(Exception):
    """Base class for all document and build failures."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class MalformedDocument(MdsiteError):
    """Front matter delimiter missing, unterminated, or not a flat mapping."""


class SchemaError(MdsiteError):
    """Front matter parsed but does not match the metadata schema."""

    def __init__(self, message: str, source: str = None, field: str = None):
        self.field = field
        self.problems: list["SchemaError"] = [self]
        super().__init__(message, source)


class UnknownField(SchemaError):
    def __init__(self, field: str, source: str = None):
        super().__init__(f"unknown field '{field}'", source, field)


class TypeMismatch(SchemaError):
    def __init__(self, field: str, expected: str, actual: Any, source: str = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"field '{field}' expected {expected}, got {type(actual).__name__} {actual!r}",
            source,
            field,
        )


class MissingRequiredField(SchemaError):
    def __init__(self, field: str, source: str = None):
        super().__init__(f"missing required field '{field}'", source, field)


class DuplicateIdentity(MdsiteError):
    """Two documents resolve to the same identity; always fatal to a build."""

    def __init__(self, identity: str, sources: list[str]):
        self.identity = identity
        self.sources = list(sources)
        super().__init__(f"duplicate identity '{identity}' in {', '.join(self.sources)}")
