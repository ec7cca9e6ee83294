#!/usr/bin/env python3
"""
HELMSCHEMA ERRORS
-----------------
Structural failures that abort a schema generation run. Linter findings are
never raised; they are returned as Diagnostic records.
"""

from typing import Any, Optional


class HelmSchemaError(Exception):
    """Base class for every failure raised by the HelmSchema core."""


class ValuesDecodeError(HelmSchemaError):
    """Raised when values.yaml cannot be decoded into a mapping."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class SchemaInferenceError(HelmSchemaError):
    """
    Raised when a value cannot be inferred.
    `path` is the deepest values path at which the failure happened.
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class NonStringKeyError(SchemaInferenceError):
    """Raised when a mapping key is not a string (e.g. `1: foo`)."""

    def __init__(self, key: Any, path: str = ""):
        self.key = key
        where = f" at '{path}'" if path else ""
        super().__init__(f"non-string key in YAML{where}: {key!r}", path=path)


class UnsafePathError(HelmSchemaError):
    """Raised when an input or output path contains a forbidden pattern."""


class SchemaSerializationError(HelmSchemaError):
    """Raised when a schema cannot be rendered as JSON (e.g. a NaN example)."""
