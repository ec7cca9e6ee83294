#!/usr/bin/env python3
"""
HELMSCHEMA ENGINE - The Orchestrator
------------------------------------
Drives one values.yaml through the generation phases:

1. Decode (ruamel.yaml safe load)
2. Infer (recursive type inference + pattern table)
3. Describe (comment extraction)
4. Specialize (named shapes)
5. Review (best-practices lint, on request)

and persists the result atomically.

Author: HelmSchema Team
Date: 2026-10-19
"""

import os
import time
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from helmschema.core.errors import HelmSchemaError, UnsafePathError
from helmschema.core.models import Diagnostic, SchemaNode, Severity
from helmschema.core.options import GeneratorOptions
from helmschema.enrichment.comments import CommentExtractor, DOCUMENT_PATH
from helmschema.enrichment.shapes import ShapeEnricher
from helmschema.inference.decoder import ValuesDecoder
from helmschema.inference.inferrer import TypeInferrer
from helmschema.rules.practices import BestPracticesLinter, count_by_severity

logger = logging.getLogger("helmschema.engine")


class SchemaEngine:
    """
    Principal orchestrator for schema generation.
    Owns one instance of each phase component, configured from the options.
    """

    def __init__(self, options: Optional[GeneratorOptions] = None):
        self.options = options or GeneratorOptions.defaults()
        self.decoder = ValuesDecoder()
        self.inferrer = TypeInferrer(self.options)
        self.enricher = ShapeEnricher()
        self.linter = BestPracticesLinter()

    def generate_from_map(self, data: Dict[Any, Any]) -> SchemaNode:
        return self.inferrer.generate_from_map(data)

    def generate_from_yaml(self, source: Union[str, bytes]) -> SchemaNode:
        """
        Full generation from raw values text. Raises a HelmSchemaError
        subclass on any structural failure; no partial schema is returned.
        """
        logger.info("generating schema from YAML data")

        # Phase 1: Decode
        try:
            data = self.decoder.decode(source)
        except HelmSchemaError as e:
            logger.error(f"failed to decode values: {e}")
            raise

        # Phase 2: Infer
        try:
            schema = self.generate_from_map(data)
        except HelmSchemaError as e:
            logger.error(f"failed to generate schema: {e}")
            raise

        # Phases 3 + 4: Describe & Specialize
        if self.options.extract_descriptions:
            logger.info("extracting descriptions from comments")
            extractor = CommentExtractor(debug=self.options.debug)
            extractor.extract(source)
            if self.options.debug:
                extractor.dump()

            top_comment = extractor.get_comment(DOCUMENT_PATH)
            if top_comment and not schema.description:
                schema.description = top_comment

            extractor.apply(schema)
            schema = self.enricher.enrich(schema)

        logger.info("schema generation completed")
        return schema

    def lint(self, schema: SchemaNode) -> List[Diagnostic]:
        return self.linter.lint(schema)

    def validate_path(self, path: Union[str, Path]) -> Path:
        """
        Rejects traversal attempts and resolves relative paths against
        the current working directory.
        """
        candidate = Path(path)
        if ".." in candidate.parts:
            raise UnsafePathError(f"path contains forbidden pattern: {path}")
        if not candidate.is_absolute():
            candidate = Path.cwd() / candidate
        return candidate

    def write_schema(self, schema: SchemaNode, output_path: Union[str, Path]) -> Path:
        """Writes the rendered schema, creating parent directories as needed."""
        target = self.validate_path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._atomic_write(target, schema.to_json() + "\n")
        return target

    def generate_file(self, input_path: Union[str, Path], output_path: Union[str, Path],
                      validate: bool = False, dry_run: bool = False) -> Dict[str, Any]:
        """
        Reads values.yaml, generates its schema and (unless dry_run) writes it.
        Structural errors propagate; nothing is written when they occur.
        """
        source_path = self.validate_path(input_path)
        if not source_path.exists():
            raise FileNotFoundError(f"input file not found: {source_path}")

        raw = source_path.read_bytes()
        logger.info(f"read values file successfully: {source_path} ({len(raw)} bytes)")

        schema = self.generate_from_yaml(raw)
        diagnostics = self.lint(schema) if validate else []

        target = self.validate_path(output_path)
        written = False
        if not dry_run:
            self.write_schema(schema, target)
            written = True
            logger.info(f"schema generated successfully: {target}")

        return {
            "input": str(source_path),
            "output": str(target),
            "written": written,
            "status": "WRITTEN" if written else "PREVIEW",
            "schema": schema,
            "diagnostics": diagnostics,
            "summary": self.generate_summary(diagnostics),
        }

    def generate_summary(self, diagnostics: List[Diagnostic]) -> Dict[str, Any]:
        counts = count_by_severity(diagnostics)
        return {
            "total_issues": len(diagnostics),
            "errors": counts[Severity.ERROR],
            "warnings": counts[Severity.WARNING],
            "info": counts[Severity.INFO],
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_suffix('.helmschema.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}") from e
