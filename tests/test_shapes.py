import pytest

from helmschema.core.models import SchemaType
from helmschema.core.options import GeneratorOptions
from helmschema.enrichment.shapes import PULL_POLICIES, ShapeEnricher
from helmschema.inference.inferrer import TypeInferrer


@pytest.fixture
def build():
    inferrer = TypeInferrer(GeneratorOptions())
    enricher = ShapeEnricher()

    def _build(data):
        return enricher.enrich(inferrer.generate_from_map(data))
    return _build


def test_image_block_is_replaced(build):
    schema = build({"image": {"repository": "nginx", "tag": "1.25"}})
    image = schema.properties["image"]

    assert image.description == "Container image configuration"
    assert image.required == ["repository"]
    assert list(image.properties) == ["repository", "tag", "pullPolicy"]
    assert image.properties["tag"].default == "latest"
    assert image.properties["tag"].examples is None
    assert image.properties["pullPolicy"].enum == PULL_POLICIES
    assert image.properties["pullPolicy"].default == "IfNotPresent"
    assert image.properties["pullPolicy"].path == "image.pullPolicy"


def test_image_needs_both_keys(build):
    schema = build({"image": {"repository": "nginx"}})
    assert schema.properties["image"].description is None
    assert list(schema.properties["image"].properties) == ["repository"]


def test_resources_block_is_replaced(build):
    schema = build({"resources": {"limits": {"cpu": "500m"}}})
    resources = schema.properties["resources"]

    assert resources.description == "CPU/Memory resource requirements"
    assert list(resources.properties) == ["limits", "requests"]
    limits = resources.properties["limits"]
    assert limits.description == "Resource limits"
    assert limits.properties["cpu"].description == "CPU limit"
    assert limits.properties["cpu"].examples == ["100m", "0.1"]
    requests = resources.properties["requests"]
    assert requests.properties["memory"].description == "Memory request"
    assert requests.properties["memory"].examples == ["128Mi", "1Gi"]


def test_union_typed_object_is_left_alone(build):
    # A 'labels' key turns the parent into [object, string]
    schema = build({"image": {"repository": "x", "tag": "y", "labels": {}}})
    image = schema.properties["image"]
    assert image.type == [SchemaType.OBJECT, SchemaType.STRING]
    assert "pullPolicy" not in image.properties


def test_nested_and_array_shapes(build):
    schema = build({
        "app": {"image": {"repository": "a", "tag": "b"}},
        "containers": [{"image": {"repository": "c", "tag": "d"}}],
    })
    nested = schema.properties["app"].properties["image"]
    assert nested.description == "Container image configuration"

    item_image = schema.properties["containers"].items.properties["image"]
    assert item_image.description == "Container image configuration"
    assert item_image.path == "containers[0].image"


def test_root_shape_keeps_document_metadata(build):
    schema = build({"repository": "x", "tag": "y"})
    assert schema.description == "Container image configuration"
    assert schema.schema == "http://json-schema.org/draft-07/schema#"
    assert schema.title == "Helm Values Schema"
