#!/usr/bin/env python3
"""
HELMSCHEMA CORE MODELS
----------------------
Defines the fundamental data structures used across the HelmSchema engine:
the value kinds produced by the YAML decoder, the Schema Node tree built by
the inferrer, and the Diagnostic records emitted by the linter.

Author: HelmSchema Team
Date: 2026-10-19
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any, Dict, List, Union

from helmschema.core.errors import SchemaSerializationError


class SchemaType(str, Enum):
    """A JSON Schema type tag."""
    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


class SchemaVersion(str, Enum):
    """JSON Schema specification versions emitted as '$schema'."""
    DRAFT_07 = "http://json-schema.org/draft-07/schema#"
    DRAFT_2019_09 = "https://json-schema.org/draft/2019-09/schema"
    DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> "SchemaVersion":
        """Accepts either a short alias (draft-07, 2019-09, 2020-12) or the full URL."""
        aliases = {
            "draft-07": cls.DRAFT_07,
            "draft07": cls.DRAFT_07,
            "2019-09": cls.DRAFT_2019_09,
            "2020-12": cls.DRAFT_2020_12,
        }
        normalized = tag.strip().lower()
        if normalized in aliases:
            return aliases[normalized]
        return cls(tag.strip())


class ValueKind(Enum):
    """Closed set of value shapes the YAML decoder can hand to the inferrer."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    UNKNOWN = "unknown"


def classify_value(value: Any) -> ValueKind:
    """
    Resolves the kind of a decoded value.
    bool is checked before int since bool is an int subclass.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.UNKNOWN


# A node's type is a single tag, an ordered union of tags, or unset.
TypeSpec = Union[SchemaType, List[SchemaType], None]

# Serialized key -> dataclass attribute, in document order.
_FIELD_ORDER = [
    ("$id", "id"),
    ("$schema", "schema"),
    ("title", "title"),
    ("description", "description"),
    ("type", "type"),
    ("format", "format"),
    ("oneOf", "one_of"),
    ("anyOf", "any_of"),
    ("allOf", "all_of"),
    ("properties", "properties"),
    ("required", "required"),
    ("items", "items"),
    ("minItems", "min_items"),
    ("maxItems", "max_items"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("minLength", "min_length"),
    ("maxLength", "max_length"),
    ("pattern", "pattern"),
    ("enum", "enum"),
    ("default", "default"),
    ("examples", "examples"),
    ("definitions", "definitions"),
    ("$ref", "ref"),
]


@dataclass
class SchemaNode:
    """
    One node of the inferred JSON Schema tree.

    `path` is the dotted address of the node inside values.yaml
    (e.g. 'service.ports[0]'). It drives pattern lookups and comment
    association and is never rendered into the output document.
    """
    type: TypeSpec = None
    path: str = field(default="", compare=False)

    # Document metadata (root only, in practice)
    schema: Optional[str] = None
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None

    # Logical composition
    one_of: Optional[List[Any]] = None
    any_of: Optional[List[Any]] = None
    all_of: Optional[List[Any]] = None

    # Objects
    properties: Optional[Dict[str, "SchemaNode"]] = None
    required: Optional[List[str]] = None

    # Arrays
    items: Optional["SchemaNode"] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None

    # Numbers
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    # Strings
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None

    # Common constraints
    enum: Optional[List[Any]] = None
    default: Optional[Any] = None
    examples: Optional[List[Any]] = None

    definitions: Optional[Dict[str, "SchemaNode"]] = None
    ref: Optional[str] = None

    def type_tags(self) -> List[SchemaType]:
        """The node's type as a list, whether it is a single tag or a union."""
        if self.type is None:
            return []
        if isinstance(self.type, list):
            return list(self.type)
        return [self.type]

    def has_type(self, tag: SchemaType) -> bool:
        return tag in self.type_tags()

    def is_union(self) -> bool:
        return isinstance(self.type, list)

    def to_dict(self) -> Dict[str, Any]:
        """
        Renders the node as a JSON Schema mapping. Unset fields are omitted,
        never emitted as null. An empty `properties` container is kept.
        """
        doc: Dict[str, Any] = {}
        for key, attr in _FIELD_ORDER:
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, list) and not value and attr != "type":
                continue

            if attr == "type":
                if isinstance(value, list):
                    doc[key] = [str(t) for t in value]
                else:
                    doc[key] = str(value)
            elif attr in ("properties", "definitions"):
                doc[key] = {name: child.to_dict() for name, child in value.items()}
            elif attr == "items":
                doc[key] = value.to_dict()
            elif attr == "schema":
                doc[key] = str(value)
            else:
                doc[key] = value
        return doc

    def to_json(self, indent: int = 2) -> str:
        """NaN and infinities have no JSON form and are rejected."""
        try:
            return json.dumps(self.to_dict(), indent=indent, allow_nan=False)
        except ValueError as e:
            raise SchemaSerializationError(f"failed to marshal schema to JSON: {e}") from e

    @classmethod
    def from_dict(cls, doc: Dict[str, Any], path: str = "") -> "SchemaNode":
        """Parses a rendered schema document back into a Schema Node tree."""
        node = cls(path=path)
        for key, attr in _FIELD_ORDER:
            if key not in doc:
                continue
            value = doc[key]

            if attr == "type":
                if isinstance(value, list):
                    node.type = [SchemaType(t) for t in value]
                else:
                    node.type = SchemaType(value)
            elif attr in ("properties", "definitions"):
                setattr(node, attr, {
                    name: cls.from_dict(child, _join(path, name))
                    for name, child in value.items()
                })
            elif attr == "items":
                node.items = cls.from_dict(value, f"{path}[0]")
            elif attr in ("required", "enum", "examples", "one_of", "any_of", "all_of"):
                setattr(node, attr, list(value))
            else:
                setattr(node, attr, value)
        return node

    @classmethod
    def from_json(cls, text: str) -> "SchemaNode":
        return cls.from_dict(json.loads(text))


def _join(parent: str, key: str) -> str:
    return key if not parent else f"{parent}.{key}"


class Severity(str, Enum):
    """How loudly a best-practices finding should be reported."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __str__(self) -> str:
        return self.value


@dataclass
class Diagnostic:
    """
    A single best-practices finding.
    Produced only by the linter; never mutates the Schema Node tree.
    """
    path: str               # Linter-computed property path ('a.b', 'list[]')
    message: str            # Human-readable explanation
    severity: Severity      # error, warning or info
