#!/usr/bin/env python3
"""
HELMSCHEMA COMMENTS - The Description Curator
---------------------------------------------
Records own-line comments from values.yaml and ties each one to the dotted
path of the key that follows it, so the schema can carry the chart author's
documentation as `description`.

Supports the helm-docs convention `# -- Description` as well as plain
comments. Trailing comments on a key line are not captured.

Author: HelmSchema Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional, Union

from helmschema.core.errors import ValuesDecodeError
from helmschema.core.models import SchemaNode

logger = logging.getLogger("helmschema.comments")

# Path under which comments preceding the first key are stored
DOCUMENT_PATH = ""


class CommentExtractor:
    """
    Single forward, line-oriented scan over the raw values text.
    """

    def __init__(self, debug: bool = False):
        # Maps dotted values paths to their description text
        self.comments: Dict[str, str] = {}
        self.debug = debug

    def _clean_comment(self, stripped: str) -> str:
        comment = stripped[1:].strip()
        # helm-docs marks explicit descriptions with a leading '--'
        if comment.startswith("-- "):
            comment = comment[3:]
        if comment.startswith("--"):
            comment = comment[2:]
        return comment

    def extract(self, source: Union[str, bytes]) -> Dict[str, str]:
        """
        Scans the text and returns the path -> description map.

        Args:
            source: The raw values.yaml text, exactly as read from disk.
        """
        if isinstance(source, bytes):
            try:
                source = source.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise ValuesDecodeError(f"failed to unmarshal YAML: {e}") from e
        source = source.lstrip('\ufeff')

        indent_to_path: Dict[int, List[str]] = {}
        line_indents: List[int] = []   # Open indentation levels, shallowest first
        pending = ""
        top_level = ""
        found_first_key = False

        for line in source.splitlines():
            stripped = line.strip()

            # 1. Blank lines keep pending comments alive
            if not stripped:
                continue

            # 2. Full-line comment
            if stripped.startswith('#'):
                comment = self._clean_comment(stripped)
                if not found_first_key:
                    top_level = comment if not top_level else top_level + "\n" + comment
                pending = comment if not pending else pending + "\n" + comment
                continue

            # 3. Key line
            if ':' not in line:
                continue
            found_first_key = True

            indent = len(line) - len(line.lstrip(' '))
            key = stripped.split(':', 1)[0].strip()

            # Parent is the nearest shallower level seen so far
            parent_level = -1
            for level in reversed(line_indents):
                if level < indent:
                    parent_level = level
                    break

            current_path = list(indent_to_path[parent_level]) if parent_level >= 0 else []
            current_path.append(key)

            if indent in line_indents:
                # Re-entering a known level: replace it and drop anything deeper
                line_indents = line_indents[:line_indents.index(indent) + 1]
            else:
                line_indents.append(indent)
            indent_to_path[indent] = current_path

            path = ".".join(current_path)
            if pending:
                if self.debug:
                    logger.debug(f"Associated comment with path {path}: {pending}")
                self.comments[path] = pending
                pending = ""

        if top_level:
            self.comments[DOCUMENT_PATH] = top_level
            if self.debug:
                logger.debug(f"Found top-level comment: {top_level}")

        return self.comments

    def get_comment(self, path: str) -> Optional[str]:
        return self.comments.get(path)

    def dump(self):
        """Logs every extracted comment for debugging."""
        logger.debug("=== Extracted Comments ===")
        for path, comment in self.comments.items():
            logger.debug(f"Path: {path!r} Comment: {comment}")
        logger.debug("=== End of Comments ===")

    def apply(self, schema: Optional[SchemaNode]):
        """
        Fills empty descriptions from the extracted comments.
        An existing description is never overwritten.
        """
        if schema is None:
            return

        comment = self.comments.get(schema.path)
        if comment and not schema.description:
            schema.description = comment
            if self.debug:
                logger.debug(f"Applied comment to {schema.path!r}")

        if schema.properties:
            for child in schema.properties.values():
                self.apply(child)

        if schema.items is not None:
            self.apply(schema.items)
