#!/usr/bin/env python3
"""
HELMSCHEMA PATTERN TABLE - Helm Chart Conventions
-------------------------------------------------
Maps fragments of a values path to the union of types chart authors
commonly accept there (e.g. `annotations` takes a map or a raw string blob,
`enabled` takes a bool or a templated string).

Rules are evaluated strictly in declaration order and the first matching
fragment wins; its type list is returned verbatim. Two rules can both match
a path textually, so reordering the table changes behaviour.

Author: HelmSchema Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import List, Tuple

from helmschema.core.models import SchemaType

PATTERN_TABLE_VERSION = "1"

# Match modes
CONTAINS = "contains"
SUFFIX = "suffix"
EXACT = "exact"
EXACT_OR_SUFFIX = "exact-or-suffix"

_OBJ, _STR, _BOOL, _NULL = SchemaType.OBJECT, SchemaType.STRING, SchemaType.BOOLEAN, SchemaType.NULL
_ARR, _INT, _NUM = SchemaType.ARRAY, SchemaType.INTEGER, SchemaType.NUMBER


@dataclass(frozen=True)
class PatternRule:
    """A group of path fragments sharing one match mode and one type union."""
    fragments: Tuple[str, ...]
    match_mode: str
    types: Tuple[SchemaType, ...]

    def __post_init__(self):
        # Paths are lowercased before matching, so fragments must be too.
        object.__setattr__(self, "fragments", tuple(f.lower() for f in self.fragments))

    def matches(self, fragment: str, path_lower: str) -> bool:
        if self.match_mode == CONTAINS:
            return fragment in path_lower
        if self.match_mode == SUFFIX:
            return path_lower.endswith(fragment)
        if self.match_mode == EXACT:
            return path_lower == fragment
        if self.match_mode == EXACT_OR_SUFFIX:
            return path_lower == fragment or path_lower.endswith("." + fragment)
        return False


PATTERN_RULES: Tuple[PatternRule, ...] = (
    # Maps that are often supplied as a YAML/JSON string instead
    PatternRule(
        fragments=(
            "annotations", "labels", "nodeselector", "securitycontext",
            "affinity", "strategy", "networkpolicy", "objectselector",
            "poddisruptionbudget", "hostaliases", "matchlabels",
            "nodeaffinity", "podaffinity", "podantiaffinity", "selector",
            "topology", "rules", "expressions", "rollingupdate",
        ),
        match_mode=CONTAINS,
        types=(_OBJ, _STR),
    ),
    # Feature toggles that may be templated strings
    PatternRule(
        fragments=(
            "autoscaling", "forceupgrade", "createnamespace", "autosync",
            "persistence", "tls", "auth", "hostnetwork", "hostpid", "hostipc",
            "singlenamespace", "debug", "rbac", "monitoring", "istio",
            "serviceaccount", "automounttoken", "priorityclass", "metrics",
            "tracing",
        ),
        match_mode=CONTAINS,
        types=(_BOOL, _STR),
    ),
    PatternRule(
        fragments=("enabled",),
        match_mode=EXACT_OR_SUFFIX,
        types=(_BOOL, _STR),
    ),
    # Lists that are frequently left empty/null or templated
    PatternRule(
        fragments=(
            "tolerations", "topologyspreadconstraints", "volumes",
            "initcontainers", "extracontainers", "volumemounts",
            "imagepullsecrets", "hostalias", "sidecars", "extravolumes",
            "extrainitcontainers", "envfrom", "args", "command", "ports",
            "env", "environment", "secrets", "configmaps", "pods",
            "endpoints", "tls.hosts", "ingress.hosts", "hostAliases",
            "deploymentannotations", "podsecuritycontext", "permissions",
        ),
        match_mode=CONTAINS,
        types=(_NULL, _ARR, _STR),
    ),
    # Optional names and references
    PatternRule(
        fragments=(
            "secretname", "storageclass", "servicenodeport", "priorityclassname",
            "certname", "keyname", "cabundle", "ingressclassname", "authsecret",
            "namespace", "finalizer", "servicename", "clusterrole", "role",
            "healthcheckpath", "mountpath", "filename", "secretkey", "timezone",
            "bootstrapservers", "topic",
        ),
        match_mode=CONTAINS,
        types=(_NULL, _STR),
    ),
    # Optional counts, ports and durations
    PatternRule(
        fragments=(
            "maxunavailable", "nodeport", "replicacount", "replicas",
            "port", "targetport", "containerport", "serviceport", "metricsport",
            "healthport", "readinessport", "maxreplicas", "minreplicas",
            "terminationgraceperiodseconds", "backofflimit", "failurethreshold",
            "successthreshold", "initialdelayseconds", "timeoutseconds",
            "periodseconds", "minavailable", "retention", "timeout", "limit",
            "weight",
        ),
        match_mode=CONTAINS,
        types=(_NULL, _INT),
    ),
    # Config blocks given either inline or as a string
    PatternRule(
        fragments=(
            "config", "extraenv", "extraenvironmentvars", "extravolumeconfig",
            "configuration", "settings", "options", "parameters", "properties",
            "authentication", "authorization", "security", "networking",
            "customvalues", "extraconfigs",
        ),
        match_mode=CONTAINS,
        types=(_STR, _OBJ),
    ),
    # Quantities: "512Mi", 2, 0.5
    PatternRule(
        fragments=(
            "resources.limits.memory", "resources.requests.memory", "memory",
            "resources.limits.cpu", "resources.requests.cpu", "cpu",
            "resources.limits", "resources.requests",
            "threshold", "percentage", "ratio", "factor", "scalar", "weight",
            "scale", "bytes", "size", "quota", "maxsurge", "minavailable",
            "retention",
        ),
        match_mode=CONTAINS,
        types=(_STR, _INT, _NUM),
    ),
    PatternRule(
        fragments=(
            "preference", "mode", "state", "status", "level", "type",
            "policy", "protocol",
        ),
        match_mode=CONTAINS,
        types=(_STR, _INT, _BOOL),
    ),
    # Free-form JSON/YAML payloads
    PatternRule(
        fragments=(
            "json", "raw", "patch", "template", "customdata", "extradata",
            "override", "manifest",
        ),
        match_mode=CONTAINS,
        types=(_STR, _OBJ, _ARR),
    ),
    # Kubernetes API fields
    PatternRule(
        fragments=(
            "containerport", "servicetype", "ingresstype", "secrettype",
            "podannotations", "accessmodes", "pathtype", "readinessprobe",
            "livenessprobe", "startupprobe", "volumesource", "volumetype",
            "service.containerport",
        ),
        match_mode=CONTAINS,
        types=(_STR, _OBJ, _ARR),
    ),
)


def lookup(path: str) -> Tuple[bool, List[SchemaType]]:
    """
    Returns (True, types) for the first rule fragment matching `path`,
    or (False, []) when structural inference should decide alone.
    """
    path_lower = path.lower()
    for rule in PATTERN_RULES:
        for fragment in rule.fragments:
            if rule.matches(fragment, path_lower):
                return True, list(rule.types)
    return False, []
