#!/usr/bin/env python3
"""
HELMSCHEMA DECODER - values.yaml Loader
---------------------------------------
Turns raw values.yaml text into a plain tree of dict/list/scalars for the
inferrer. Uses ruamel.yaml's safe loader so only standard YAML tags are
materialized.
"""

import datetime
import logging
from typing import Any, Dict, Union

from ruamel.yaml import YAML, YAMLError

from helmschema.core.errors import ValuesDecodeError

logger = logging.getLogger("helmschema.decoder")


class ValuesDecoder:
    """
    Loads a single values document and normalizes it for inference.
    """

    def __init__(self):
        self.yaml = YAML(typ='safe')
        # Helm reads values as YAML 1.1: yes/no/on/off are booleans
        self.yaml.version = (1, 1)

    def _normalize_text(self, source: Union[str, bytes]) -> str:
        """BOM-aware decoding and CRLF -> LF."""
        if isinstance(source, bytes):
            try:
                source = source.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                logger.error(f"values file is not valid UTF-8: {e}")
                raise ValuesDecodeError(f"failed to unmarshal YAML: {e}") from e
        else:
            source = source.lstrip('\ufeff')
        return source.replace('\r\n', '\n')

    def _normalize_value(self, value: Any) -> Any:
        """
        Timestamps come back from the safe loader as date/datetime objects;
        Helm sees them as text, so hand them to the inferrer as ISO strings.
        """
        if isinstance(value, datetime.date):  # datetime is a date subclass
            return value.isoformat()
        if isinstance(value, dict):
            return {k: self._normalize_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._normalize_value(v) for v in value]
        return value

    def load(self, source: Union[str, bytes]) -> Any:
        """Parses the document, returning whatever the root value is."""
        text = self._normalize_text(source)
        try:
            data = self.yaml.load(text)
        except YAMLError as e:
            mark = getattr(e, 'problem_mark', None) or getattr(e, 'context_mark', None)
            if mark:
                raise ValuesDecodeError(
                    f"failed to unmarshal YAML: {e}", line=mark.line + 1, column=mark.column + 1
                ) from e
            raise ValuesDecodeError(f"failed to unmarshal YAML: {e}") from e
        return self._normalize_value(data)

    def decode(self, source: Union[str, bytes]) -> Dict[Any, Any]:
        """
        Loads values.yaml and enforces a mapping at the root.
        Key types are left untouched; the inferrer rejects non-string keys.
        """
        data = self.load(source)
        if not isinstance(data, dict):
            kind = "empty document" if data is None else type(data).__name__
            logger.error(f"root YAML value must be a map, got {kind}")
            raise ValuesDecodeError(f"root YAML value must be a map, got {kind}")
        return data
