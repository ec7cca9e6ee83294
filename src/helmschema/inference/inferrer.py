#!/usr/bin/env python3
"""
HELMSCHEMA INFERRER - Type Inference (Phase 1)
----------------------------------------------
Walks a decoded values tree depth-first and builds the Schema Node tree.

Structural signals (the value's own kind, the shape of a mapping's keys) are
combined with the Pattern Table: whenever the table matches a node's path,
its type union replaces whatever the structure suggested.

Author: HelmSchema Team
Date: 2026-10-19
"""

import logging
from typing import Any, Dict, List, Optional

from helmschema.core.errors import NonStringKeyError, SchemaInferenceError
from helmschema.core.models import SchemaNode, SchemaType, ValueKind, classify_value
from helmschema.core.options import GeneratorOptions
from helmschema.inference import patterns

logger = logging.getLogger("helmschema.inferrer")

# Key suffixes that mark the enclosing mapping as "object or raw string"
STRUCTURAL_KEY_SUFFIXES = ("annotations", "labels", "nodeselector", "affinity", "selector")

# Class used by the mixed-type check -> tag used in the synthesized union.
# integer and float are distinct classes but share the 'number' tag.
_CLASS_TO_TAG = {
    "null": SchemaType.NULL,
    "boolean": SchemaType.BOOLEAN,
    "integer": SchemaType.NUMBER,
    "float": SchemaType.NUMBER,
    "string": SchemaType.STRING,
    "object": SchemaType.OBJECT,
    "array": SchemaType.ARRAY,
}

_KIND_TO_CLASS = {
    ValueKind.NULL: "null",
    ValueKind.BOOLEAN: "boolean",
    ValueKind.INTEGER: "integer",
    ValueKind.FLOAT: "float",
    ValueKind.STRING: "string",
    ValueKind.MAPPING: "object",
    ValueKind.SEQUENCE: "array",
}


# --- String format heuristics ---

def is_date(s: str) -> bool:
    """YYYY-MM-DD shape."""
    return len(s) == 10 and s[4] == '-' and s[7] == '-'


def is_date_time(s: str) -> bool:
    """ISO 8601 date-time shape."""
    return len(s) >= 19 and s[4] == '-' and s[7] == '-' and s[10] == 'T'


def is_email(s: str) -> bool:
    return '@' in s and '.' in s


def is_uri(s: str) -> bool:
    return s.startswith("http://") or s.startswith("https://")


def is_likely_yaml_or_json(s: str) -> bool:
    """
    True when a string value looks like an embedded document: a JSON object or
    array, or any non-comment line carrying a 'key: value' colon.
    """
    s = s.strip()
    if (s.startswith('{') and s.endswith('}')) or (s.startswith('[') and s.endswith(']')):
        return True

    for line in s.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if ':' in line:
            return True
    return False


def infer_format(s: str) -> Optional[str]:
    if is_date(s):
        return "date"
    if is_date_time(s):
        return "date-time"
    if is_email(s):
        return "email"
    if is_uri(s):
        return "uri"
    return None


# --- Mixed-type arrays ---

def _item_class(item: Any) -> Optional[str]:
    return _KIND_TO_CLASS.get(classify_value(item))


def has_mixed_types(items: List[Any]) -> bool:
    """
    True when a sequence holds more than one class of element.
    1 and 2.5 count as different classes here.
    """
    if len(items) <= 1:
        return False

    found = set()
    for item in items:
        found.add(_item_class(item))
        if len(found) > 1:
            return True
    return False


def union_of_item_types(items: List[Any]) -> List[SchemaType]:
    """Unique tags of every element, in the order they are first seen."""
    tags: List[SchemaType] = []
    for item in items:
        item_class = _item_class(item)
        if item_class is None:
            continue
        tag = _CLASS_TO_TAG[item_class]
        if tag not in tags:
            tags.append(tag)
    return tags


def child_path(parent: str, key: str) -> str:
    return key if not parent else f"{parent}.{key}"


class TypeInferrer:
    """
    Recursive value -> schema inference.
    Holds no state besides its options, so one instance can serve many runs.
    """

    def __init__(self, options: Optional[GeneratorOptions] = None):
        self.options = options or GeneratorOptions()

    def _apply_pattern_override(self, schema: SchemaNode, path: str) -> None:
        matched, types = patterns.lookup(path)
        if matched:
            schema.type = types

    def infer(self, value: Any, path: str) -> SchemaNode:
        """Infers the schema for `value` found at `path`."""
        kind = classify_value(value)

        if kind is ValueKind.NULL:
            schema = SchemaNode(type=SchemaType.NULL, path=path)
            self._apply_pattern_override(schema, path)
            return schema

        if kind is ValueKind.BOOLEAN:
            schema = SchemaNode(type=SchemaType.BOOLEAN, path=path)
            if self.options.include_examples:
                schema.default = value
            self._apply_pattern_override(schema, path)
            return schema

        if kind is ValueKind.INTEGER or kind is ValueKind.FLOAT:
            tag = SchemaType.INTEGER if kind is ValueKind.INTEGER else SchemaType.NUMBER
            schema = SchemaNode(type=tag, path=path)
            if self.options.include_examples:
                schema.examples = [value]
            self._apply_pattern_override(schema, path)
            return schema

        if kind is ValueKind.STRING:
            return self._infer_string(value, path)

        if kind is ValueKind.SEQUENCE:
            return self._infer_sequence(list(value), path)

        if kind is ValueKind.MAPPING:
            return self._infer_mapping(value, path)

        # Anything else stays unconstrained
        logger.info(f"encountered unknown type at '{path}': {type(value).__name__}")
        return SchemaNode(path=path)

    def _infer_string(self, value: str, path: str) -> SchemaNode:
        schema = SchemaNode(path=path)

        matched, types = patterns.lookup(path)
        if matched:
            schema.type = types
        elif is_likely_yaml_or_json(value):
            schema.type = [SchemaType.STRING, SchemaType.OBJECT]
        else:
            schema.type = SchemaType.STRING
            schema.format = infer_format(value)

        # "-" is the conventional "let the template decide" marker for toggles
        if value == "-" and (path == "enabled" or path.endswith(".enabled")):
            schema.type = [SchemaType.STRING, SchemaType.BOOLEAN]

        if self.options.include_examples:
            schema.examples = [value]
        return schema

    def _infer_sequence(self, items: List[Any], path: str) -> SchemaNode:
        schema = SchemaNode(type=SchemaType.ARRAY, path=path)

        # Empty arrays get no 'items', which means "any type"
        if items:
            item_path = f"{path}[0]"
            if has_mixed_types(items):
                schema.items = SchemaNode(type=union_of_item_types(items), path=item_path)
            else:
                try:
                    schema.items = self.infer(items[0], item_path)
                except SchemaInferenceError as e:
                    logger.error(f"failed to infer schema for array item at '{item_path}': {e}")
                    raise SchemaInferenceError(
                        f"failed to infer schema for array item: {e}", path=e.path
                    ) from e

        self._apply_pattern_override(schema, path)
        return schema

    def _infer_mapping(self, mapping: Dict[Any, Any], path: str) -> SchemaNode:
        schema = SchemaNode(type=SchemaType.OBJECT, path=path, properties={})

        for key in mapping:
            if isinstance(key, str) and key.lower().endswith(STRUCTURAL_KEY_SUFFIXES):
                schema.type = [SchemaType.OBJECT, SchemaType.STRING]
                break

        schema.properties, schema.required = self._infer_properties(mapping, path)

        self._apply_pattern_override(schema, path)
        return schema

    def _infer_properties(self, mapping: Dict[str, Any], path: str):
        """Infers every entry of a mapping; returns (properties, required-or-None)."""
        properties: Dict[str, SchemaNode] = {}
        required: List[str] = []

        for key, value in mapping.items():
            if not isinstance(key, str):
                raise NonStringKeyError(key, path)

            prop_path = child_path(path, key)
            try:
                properties[key] = self.infer(value, prop_path)
            except SchemaInferenceError as e:
                logger.error(f"failed to infer schema for property '{key}' at '{prop_path}': {e}")
                raise SchemaInferenceError(
                    f"failed to infer schema for property '{key}': {e}", path=e.path
                ) from e

            if self.options.require_by_default and value is not None:
                required.append(key)

        return properties, (required or None)

    def generate_from_map(self, data: Dict[Any, Any]) -> SchemaNode:
        """
        Builds the root document. The root is always a plain object carrying
        the '$schema', title and description from the options; its children
        sit at bare-key paths.
        """
        root = SchemaNode(
            type=SchemaType.OBJECT,
            path="",
            schema=str(self.options.schema_version),
            title=self.options.title or None,
            description=self.options.description or None,
            properties={},
        )
        root.properties, root.required = self._infer_properties(data, "")
        return root

    def infer_array_items_with_multiple_types(self, items: List[Any], path: str) -> SchemaNode:
        """
        Items schema for `items`: a bare union for mixed arrays, the first
        element's schema for homogeneous ones, an untyped array when empty.
        """
        if has_mixed_types(items):
            return SchemaNode(type=union_of_item_types(items), path=path)
        if items:
            return self.infer(items[0], f"{path}[0]")
        return SchemaNode(type=SchemaType.ARRAY, path=path)

    def create_union_type_schema(self, types: List[SchemaType], path: str) -> SchemaNode:
        return SchemaNode(type=list(types), path=path)
