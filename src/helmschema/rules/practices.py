#!/usr/bin/env python3
"""
HELMSCHEMA BEST PRACTICES - The Reviewer
----------------------------------------
Walks a finished schema and reports where the chart's values deviate from
Helm conventions: naming, nesting depth, array shape and documentation.

Findings are data, never exceptions. The schema is not modified.

Author: HelmSchema Team
Date: 2026-10-19
"""

from typing import Dict, List

from helmschema.core.models import Diagnostic, SchemaNode, SchemaType, Severity

# Recommended maximum nesting depth for Helm values
MAX_NESTING_DEPTH = 5

# Array paths where an explicit element count is usually expected
CONSTRAINED_ARRAY_HINTS = ("secret", "config", "certificate")

SEVERITY_ORDER = (Severity.ERROR, Severity.WARNING, Severity.INFO)


class BestPracticesLinter:
    """
    Single depth-first pass. Every rule in `active_rules` is evaluated at
    every node; rules are independent and all applicable ones fire.
    """

    def __init__(self, max_depth: int = MAX_NESTING_DEPTH):
        self.max_depth = max_depth
        self.active_rules = [
            self._check_naming,
            self._check_nesting_depth,
            self._check_array_structure,
            self._check_documentation,
        ]

    def lint(self, schema: SchemaNode) -> List[Diagnostic]:
        """Returns the findings in traversal order."""
        diagnostics: List[Diagnostic] = []
        self._walk(schema, "", 0, diagnostics)
        return diagnostics

    def _walk(self, schema: SchemaNode, path: str, depth: int, out: List[Diagnostic]):
        for rule in self.active_rules:
            rule(schema, path, depth, out)

        if schema.properties is not None:
            for name, child in schema.properties.items():
                child_path = name if not path else f"{path}.{name}"
                self._walk(child, child_path, depth + 1, out)

        if schema.has_type(SchemaType.ARRAY) and schema.items is not None:
            self._walk(schema.items, path + "[]", depth + 1, out)

    def _check_naming(self, schema: SchemaNode, path: str, depth: int, out: List[Diagnostic]):
        """Property names should be camelCase, without '-' or '_'."""
        if not schema.properties or path == "":
            return

        for name in schema.properties:
            if not name:
                continue
            prop_path = f"{path}.{name}"
            if name[0].lower() != name[0]:
                out.append(Diagnostic(
                    prop_path, "Property names should follow camelCase convention", Severity.WARNING
                ))
            if "-" in name or "_" in name:
                out.append(Diagnostic(
                    prop_path, "Property names should not contain hyphens or underscores", Severity.ERROR
                ))

    def _check_nesting_depth(self, schema: SchemaNode, path: str, depth: int, out: List[Diagnostic]):
        if depth > self.max_depth:
            out.append(Diagnostic(
                path,
                f"Excessive nesting depth ({depth} levels). Consider flattening the structure "
                f"or using dot notation for paths.",
                Severity.WARNING,
            ))

    def _check_array_structure(self, schema: SchemaNode, path: str, depth: int, out: List[Diagnostic]):
        if not schema.has_type(SchemaType.ARRAY):
            return

        if schema.items is None:
            out.append(Diagnostic(path, "Array should define an items schema for validation", Severity.WARNING))

        path_lower = path.lower()
        if path and any(hint in path_lower for hint in CONSTRAINED_ARRAY_HINTS):
            if schema.min_items is None and schema.max_items is None:
                out.append(Diagnostic(
                    path, "Consider adding minItems/maxItems constraints for this array", Severity.INFO
                ))

    def _check_documentation(self, schema: SchemaNode, path: str, depth: int, out: List[Diagnostic]):
        if path == "":
            return

        if not schema.description:
            # Top-level and first-level properties are what users read first
            severity = Severity.WARNING if path.count(".") <= 1 else Severity.INFO
            out.append(Diagnostic(path, "Property should have a description", severity))

        is_leaf = (
            not schema.properties
            and not schema.has_type(SchemaType.OBJECT)
            and not schema.has_type(SchemaType.ARRAY)
        )
        if is_leaf and not schema.examples and schema.default is None:
            out.append(Diagnostic(path, "Consider adding examples or default value", Severity.INFO))


def validate_helm_best_practices(schema: SchemaNode) -> List[Diagnostic]:
    """Convenience wrapper around BestPracticesLinter().lint()."""
    return BestPracticesLinter().lint(schema)


def count_by_severity(diagnostics: List[Diagnostic]) -> Dict[Severity, int]:
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    return counts


def format_diagnostics(diagnostics: List[Diagnostic]) -> str:
    """
    Plain-text report: a summary line, then errors, warnings and info,
    each group in discovery order.
    """
    if not diagnostics:
        return "No validation issues found."

    counts = count_by_severity(diagnostics)
    lines = [
        f"Found {len(diagnostics)} issues: {counts[Severity.ERROR]} errors, "
        f"{counts[Severity.WARNING]} warnings, {counts[Severity.INFO]} info",
        "",
    ]

    headings = {Severity.ERROR: "ERRORS:", Severity.WARNING: "WARNINGS:", Severity.INFO: "INFO:"}
    for severity in SEVERITY_ORDER:
        if not counts[severity]:
            continue
        lines.append(headings[severity])
        lines.extend(f"- {d.path}: {d.message}" for d in diagnostics if d.severity == severity)
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"
