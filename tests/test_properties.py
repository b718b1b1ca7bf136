"""Tests for field definitions and their Notion translation."""
import pytest
from pydantic import TypeAdapter, ValidationError
from template_deployer.generators.template_gen.properties import (
    field_to_property,
    record_to_properties,
    schema_to_properties,
)
from template_deployer.schemas.fields import FIELD_VARIANTS, FieldDefinition, ResourceSchema

FIELD = TypeAdapter(FieldDefinition)


def test_every_variant_has_a_translation():
    samples = {
        "select": {"options": ["A"]},
        "multi_select": {"options": ["A"]},
        "formula": {"expression": "1"},
        "relation": {"target": "projects"},
        "rollup": {"relation": "Projects", "property": "Name"},
    }
    for variant in FIELD_VARIANTS:
        kind = variant.model_fields["type"].default
        field = FIELD.validate_python({"type": kind, **samples.get(kind, {})})
        translated = field_to_property(field, lambda target: "db-1")
        assert kind in translated


@pytest.mark.parametrize("kind", ["select", "multi_select"])
def test_choice_fields_require_options(kind):
    with pytest.raises(ValidationError):
        FIELD.validate_python({"type": kind})
    with pytest.raises(ValidationError):
        FIELD.validate_python({"type": kind, "options": []})


@pytest.mark.parametrize("kind", ["title", "rich_text", "number", "date", "checkbox", "relation"])
def test_other_fields_forbid_options(kind):
    payload = {"type": kind, "options": ["A"]}
    if kind == "relation":
        payload["target"] = "projects"
    with pytest.raises(ValidationError):
        FIELD.validate_python(payload)


def test_unknown_field_type_rejected():
    with pytest.raises(ValidationError):
        FIELD.validate_python({"type": "status"})


def _clients_schema():
    return ResourceSchema.model_validate({
        "name": "clients",
        "title": "Clients",
        "properties": {
            "Name": {"type": "title"},
            "Relationship": {"type": "select", "options": ["Active", "Inactive"]},
            "Projects": {"type": "relation", "target": "projects"},
            "Project Count": {"type": "rollup", "relation": "Projects", "property": "Name"},
        },
    })


def test_relations_resolve_against_created_databases():
    props = schema_to_properties(_clients_schema(), {"projects": "db-projects"}.get)

    assert props["Projects"] == {"relation": {"database_id": "db-projects", "single_property": {}}}
    assert props["Project Count"]["rollup"]["relation_property_name"] == "Projects"
    assert props["Relationship"]["select"]["options"][0] == {"name": "Active", "color": "default"}


def test_unresolved_relation_and_dependent_rollup_are_dropped():
    props = schema_to_properties(_clients_schema())
    assert list(props) == ["Name", "Relationship"]


def test_rollup_declared_before_its_relation_is_kept():
    schema = ResourceSchema.model_validate({
        "name": "clients",
        "title": "Clients",
        "properties": {
            "Project Count": {"type": "rollup", "relation": "Projects", "property": "Name"},
            "Name": {"type": "title"},
            "Projects": {"type": "relation", "target": "projects"},
            "Name Count": {"type": "rollup", "relation": "Name", "property": "Name"},
        },
    })
    props = schema_to_properties(schema, {"projects": "db-projects"}.get)

    assert list(props) == ["Project Count", "Name", "Projects"]
    assert props["Project Count"]["rollup"]["relation_property_name"] == "Projects"


def test_schema_without_fields_gets_defaults():
    props = schema_to_properties(ResourceSchema(name="reports", title="Reports"))
    assert props["Name"] == {"title": {}}
    assert props["Status"]["select"]["options"][1] == {"name": "In Progress", "color": "blue"}
    assert props["Created"] == {"created_time": {}}


def test_record_keeps_only_declared_keys():
    record = {"Name": "Acme", "Relationship": "Active", "Unknown": "x", "Projects": ["p1"]}
    props = record_to_properties(record, _clients_schema())

    assert props == {
        "Name": {"title": [{"text": {"content": "Acme"}}]},
        "Relationship": {"select": {"name": "Active"}},
    }
