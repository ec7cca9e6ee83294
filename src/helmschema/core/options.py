#!/usr/bin/env python3
"""
HELMSCHEMA GENERATOR OPTIONS
----------------------------
The configuration record threaded through one schema generation run.
Populated by the CLI, consumed by the engine, the inferrer and the
comment extractor.

Author: HelmSchema Team
Date: 2026-10-19
"""

from dataclasses import dataclass

from helmschema.core.models import SchemaVersion

DEFAULT_TITLE = "Helm Values Schema"


@dataclass
class GeneratorOptions:
    """
    Controls how a values.yaml is turned into a schema.
    """
    schema_version: SchemaVersion = SchemaVersion.DRAFT_07  # Emitted as '$schema'
    title: str = DEFAULT_TITLE                 # Root 'title'
    description: str = ""                      # Root 'description'; top comment fills it when empty
    require_by_default: bool = False           # Populate 'required' with every non-null key
    include_examples: bool = True              # Attach literal values as examples/defaults
    extract_descriptions: bool = True          # Run the comment extractor and shape enricher
    debug: bool = False                        # Trace comment association at DEBUG level

    @classmethod
    def defaults(cls) -> "GeneratorOptions":
        return cls()
