#!/usr/bin/env python3
"""
HELMSCHEMA BEST PRACTICES TESTS
-------------------------------
Runs the linter against a hand-built schema with one offender per rule.
"""

import pytest

from helmschema.core.models import Diagnostic, SchemaNode, SchemaType, Severity
from helmschema.rules.practices import (
    BestPracticesLinter,
    count_by_severity,
    format_diagnostics,
    validate_helm_best_practices,
)

S, O, A, I = SchemaType.STRING, SchemaType.OBJECT, SchemaType.ARRAY, SchemaType.INTEGER


def _nested(depth: int) -> SchemaNode:
    node = SchemaNode(type=S)
    for level in range(depth, 0, -1):
        node = SchemaNode(type=O, properties={f"level{level}": node})
    return node


@pytest.fixture
def schema():
    return SchemaNode(type=O, properties={
        "replicas": SchemaNode(type=I, description="Number of replicas for the deployment", default=3),
        "image": SchemaNode(type=O, description="Container image configuration", properties={
            "repository": SchemaNode(type=S, description="Docker image repository", default="nginx"),
            "tag": SchemaNode(type=S, description="Docker image tag", default="latest"),
            "pullPolicy": SchemaNode(type=S, description="Image pull policy", default="IfNotPresent"),
        }),
        "objectWithBadProps": SchemaNode(type=O, description="Object with badly named properties", properties={
            "NOT_CAMEL_CASE": SchemaNode(type=S),
            "with-hyphen": SchemaNode(type=S),
            "with_underscore": SchemaNode(type=S),
        }),
        "NOT_CAMEL_CASE": SchemaNode(type=S),
        "with-hyphen": SchemaNode(type=S),
        "deeplyNested": _nested(6),
        "certificates": SchemaNode(type=A),
        "secrets": SchemaNode(type=A, items=SchemaNode(type=O, properties={
            "name": SchemaNode(type=S),
            "value": SchemaNode(type=S),
        })),
        "noDescription": SchemaNode(type=S),
        "noExamples": SchemaNode(type=S, description="This field has a description but no examples or default"),
    })


@pytest.fixture
def findings(schema):
    return {(d.path, d.message, d.severity) for d in validate_helm_best_practices(schema)}


@pytest.mark.parametrize("path, message, severity", [
    ("objectWithBadProps.NOT_CAMEL_CASE", "Property names should follow camelCase convention", Severity.WARNING),
    ("objectWithBadProps.NOT_CAMEL_CASE", "Property names should not contain hyphens or underscores", Severity.ERROR),
    ("objectWithBadProps.with-hyphen", "Property names should not contain hyphens or underscores", Severity.ERROR),
    ("objectWithBadProps.with_underscore", "Property names should not contain hyphens or underscores", Severity.ERROR),
    ("certificates", "Array should define an items schema for validation", Severity.WARNING),
    ("certificates", "Consider adding minItems/maxItems constraints for this array", Severity.INFO),
    ("secrets", "Consider adding minItems/maxItems constraints for this array", Severity.INFO),
    ("noDescription", "Property should have a description", Severity.WARNING),
    ("noDescription", "Consider adding examples or default value", Severity.INFO),
    ("noExamples", "Consider adding examples or default value", Severity.INFO),
    ("secrets[].name", "Property should have a description", Severity.WARNING),
    ("deeplyNested.level1.level2", "Property should have a description", Severity.INFO),
])
def test_expected_findings(findings, path, message, severity):
    assert (path, message, severity) in findings


def test_top_level_names_are_not_checked(findings):
    naming = {"Property names should follow camelCase convention",
              "Property names should not contain hyphens or underscores"}
    assert not [f for f in findings if f[0] in ("NOT_CAMEL_CASE", "with-hyphen") and f[1] in naming]


def test_nesting_depth(schema):
    deep = [d for d in BestPracticesLinter().lint(schema) if d.message.startswith("Excessive nesting depth")]
    assert [d.path for d in deep] == [
        "deeplyNested.level1.level2.level3.level4.level5",
        "deeplyNested.level1.level2.level3.level4.level5.level6",
    ]
    assert deep[0].message == (
        "Excessive nesting depth (6 levels). Consider flattening the structure or using dot notation for paths."
    )
    assert all(d.severity == Severity.WARNING for d in deep)


def test_documented_leaves_are_clean(findings):
    assert not [f for f in findings if f[0].startswith("image") or f[0] == "replicas"]


def test_root_is_never_reported():
    diagnostics = BestPracticesLinter().lint(SchemaNode(type=O, properties={}))
    assert diagnostics == []


def test_union_leaf_with_object_is_not_a_leaf():
    schema = SchemaNode(type=O, properties={
        "podLabels": SchemaNode(type=[O, S], description="Extra labels"),
    })
    assert BestPracticesLinter().lint(schema) == []


def test_constrained_array_match_ignores_case():
    schema = SchemaNode(type=O, properties={
        "extraConfigMaps": SchemaNode(
            type=A, description="Mounted maps",
            items=SchemaNode(type=S, description="Map name", default="x"),
        ),
    })
    messages = [d.message for d in BestPracticesLinter().lint(schema)]
    assert messages == ["Consider adding minItems/maxItems constraints for this array"]


def test_custom_depth_limit():
    deep = [d for d in BestPracticesLinter(max_depth=2).lint(_nested(3))
            if d.message.startswith("Excessive")]
    assert [d.path for d in deep] == ["level1.level2.level3"]


def test_format_diagnostics():
    diagnostics = [
        Diagnostic("test.path1", "Test error message", Severity.ERROR),
        Diagnostic("test.path2", "Test warning message", Severity.WARNING),
        Diagnostic("test.path3", "Test info message", Severity.INFO),
    ]
    assert format_diagnostics(diagnostics) == (
        "Found 3 issues: 1 errors, 1 warnings, 1 info\n"
        "\n"
        "ERRORS:\n"
        "- test.path1: Test error message\n"
        "\n"
        "WARNINGS:\n"
        "- test.path2: Test warning message\n"
        "\n"
        "INFO:\n"
        "- test.path3: Test info message\n"
    )


def test_format_groups_by_severity_and_skips_empty_sections():
    diagnostics = [
        Diagnostic("b", "second", Severity.INFO),
        Diagnostic("a", "first", Severity.ERROR),
        Diagnostic("c", "third", Severity.INFO),
    ]
    text = format_diagnostics(diagnostics)
    assert "WARNINGS:" not in text
    assert text.index("- a: first") < text.index("- b: second") < text.index("- c: third")


def test_format_without_findings():
    assert format_diagnostics([]) == "No validation issues found."


def test_count_by_severity():
    counts = count_by_severity([Diagnostic("a", "m", Severity.WARNING)] * 2)
    assert counts == {Severity.ERROR: 0, Severity.WARNING: 2, Severity.INFO: 0}
