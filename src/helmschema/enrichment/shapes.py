#!/usr/bin/env python3
"""
HELMSCHEMA SHAPES - Named Shape Specialization
----------------------------------------------
The ShapeEnricher recognizes well-known Helm sub-objects (container images,
resource requirements) anywhere in an inferred schema and swaps them for a
curated fragment carrying descriptions, enums and defaults.

Replacement is total: whatever was inferred for that subtree, including
descriptions taken from comments, is discarded.

Author: HelmSchema Team
Date: 2026-10-19
"""

import logging
from typing import Callable, List, Tuple

from helmschema.core.models import SchemaNode, SchemaType

logger = logging.getLogger("helmschema.shapes")

PULL_POLICIES = ["Always", "IfNotPresent", "Never"]


def _join(path: str, key: str) -> str:
    return key if not path else f"{path}.{key}"


class ShapeEnricher:
    """
    Registry-driven specializer. Each shape is a (detector, builder) pair;
    the first detector that fires replaces the node with its builder's output.
    """

    def __init__(self):
        self.active_shapes: List[Tuple[Callable[[SchemaNode], bool], Callable[[str], SchemaNode]]] = [
            (self._is_image_config, self._image_schema),
            (self._is_resources_config, self._resources_schema),
        ]

    def enrich(self, schema: SchemaNode) -> SchemaNode:
        """
        Specializes `schema` and everything below it.
        Returns the node that should take `schema`'s place.
        """
        for detector, builder in self.active_shapes:
            if detector(schema):
                logger.debug(f"Replacing '{schema.path}' with canonical {builder.__name__.strip('_')}")
                replacement = builder(schema.path)
                # Document metadata survives if the root itself is a named shape
                replacement.schema = schema.schema
                replacement.id = schema.id
                replacement.title = schema.title
                schema = replacement
                break

        if schema.properties:
            for key in list(schema.properties):
                schema.properties[key] = self.enrich(schema.properties[key])

        if schema.items is not None:
            schema.items = self.enrich(schema.items)

        return schema

    # --- Detectors ---

    def _is_plain_object(self, schema: SchemaNode) -> bool:
        return schema.type == SchemaType.OBJECT and schema.properties is not None

    def _is_image_config(self, schema: SchemaNode) -> bool:
        """An object with both `repository` and `tag`."""
        if not self._is_plain_object(schema):
            return False
        return "repository" in schema.properties and "tag" in schema.properties

    def _is_resources_config(self, schema: SchemaNode) -> bool:
        """An object with `limits` and/or `requests`."""
        if not self._is_plain_object(schema):
            return False
        return "limits" in schema.properties or "requests" in schema.properties

    # --- Canonical fragments ---

    def _image_schema(self, path: str) -> SchemaNode:
        return SchemaNode(
            type=SchemaType.OBJECT,
            path=path,
            description="Container image configuration",
            properties={
                "repository": SchemaNode(
                    type=SchemaType.STRING,
                    path=_join(path, "repository"),
                    description="Container image repository",
                ),
                "tag": SchemaNode(
                    type=SchemaType.STRING,
                    path=_join(path, "tag"),
                    description="Container image tag",
                    default="latest",
                ),
                "pullPolicy": SchemaNode(
                    type=SchemaType.STRING,
                    path=_join(path, "pullPolicy"),
                    description="Image pull policy",
                    enum=list(PULL_POLICIES),
                    default="IfNotPresent",
                ),
            },
            required=["repository"],
        )

    def _resource_block(self, path: str, kind: str) -> SchemaNode:
        """`kind` is 'limit' or 'request'."""
        return SchemaNode(
            type=SchemaType.OBJECT,
            path=path,
            description=f"Resource {kind}s",
            properties={
                "cpu": SchemaNode(
                    type=SchemaType.STRING,
                    path=_join(path, "cpu"),
                    description=f"CPU {kind}",
                    examples=["100m", "0.1"],
                ),
                "memory": SchemaNode(
                    type=SchemaType.STRING,
                    path=_join(path, "memory"),
                    description=f"Memory {kind}",
                    examples=["128Mi", "1Gi"],
                ),
            },
        )

    def _resources_schema(self, path: str) -> SchemaNode:
        return SchemaNode(
            type=SchemaType.OBJECT,
            path=path,
            description="CPU/Memory resource requirements",
            properties={
                "limits": self._resource_block(_join(path, "limits"), "limit"),
                "requests": self._resource_block(_join(path, "requests"), "request"),
            },
        )
