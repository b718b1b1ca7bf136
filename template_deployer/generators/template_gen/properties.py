"""Translate resource schemas and seed records into Notion property payloads."""
import logging
from functools import singledispatch
from typing import Any, Callable, Dict, Mapping, Optional
from template_deployer.generators.template_gen.schema_store import default_fields
from template_deployer.schemas.fields import (
    CheckboxField,
    CreatedByField,
    CreatedTimeField,
    DateField,
    EmailField,
    FilesField,
    FormulaField,
    LastEditedByField,
    LastEditedTimeField,
    MultiSelectField,
    NumberField,
    PeopleField,
    PhoneNumberField,
    RelationField,
    ResourceSchema,
    RichTextField,
    RollupField,
    SelectField,
    TitleField,
    UrlField,
)

log = logging.getLogger(__name__)

# Resource-type name -> Notion database id for databases created so far.
RelationResolver = Callable[[str], Optional[str]]

STATUS_COLORS = {
    "Not Started": "gray",
    "Planning": "yellow",
    "In Progress": "blue",
    "Completed": "green",
    "On Hold": "red",
    "Cancelled": "brown",
}


def _options(values) -> Dict[str, Any]:
    return {"options": [{"name": v, "color": STATUS_COLORS.get(v, "default")} for v in values]}


@singledispatch
def field_to_property(field, resolve_relation: RelationResolver) -> Optional[Dict[str, Any]]:
    raise TypeError(f"No Notion translation for field type {type(field).__name__}")


@field_to_property.register
def _(field: TitleField, resolve_relation: RelationResolver):
    return {"title": {}}


@field_to_property.register
def _(field: RichTextField, resolve_relation: RelationResolver):
    return {"rich_text": {}}


@field_to_property.register
def _(field: NumberField, resolve_relation: RelationResolver):
    return {"number": {"format": field.format}}


@field_to_property.register
def _(field: SelectField, resolve_relation: RelationResolver):
    return {"select": _options(field.options)}


@field_to_property.register
def _(field: MultiSelectField, resolve_relation: RelationResolver):
    return {"multi_select": _options(field.options)}


@field_to_property.register
def _(field: DateField, resolve_relation: RelationResolver):
    return {"date": {}}


@field_to_property.register
def _(field: CheckboxField, resolve_relation: RelationResolver):
    return {"checkbox": {}}


@field_to_property.register
def _(field: UrlField, resolve_relation: RelationResolver):
    return {"url": {}}


@field_to_property.register
def _(field: EmailField, resolve_relation: RelationResolver):
    return {"email": {}}


@field_to_property.register
def _(field: PhoneNumberField, resolve_relation: RelationResolver):
    return {"phone_number": {}}


@field_to_property.register
def _(field: PeopleField, resolve_relation: RelationResolver):
    return {"people": {}}


@field_to_property.register
def _(field: FilesField, resolve_relation: RelationResolver):
    return {"files": {}}


@field_to_property.register
def _(field: FormulaField, resolve_relation: RelationResolver):
    return {"formula": {"expression": field.expression}}


@field_to_property.register
def _(field: RelationField, resolve_relation: RelationResolver):
    database_id = resolve_relation(field.target)
    if database_id is None:
        return None
    return {"relation": {"database_id": database_id, "single_property": {}}}


@field_to_property.register
def _(field: RollupField, resolve_relation: RelationResolver):
    return {
        "rollup": {
            "relation_property_name": field.relation,
            "rollup_property_name": field.property,
            "function": field.function,
        }
    }


@field_to_property.register
def _(field: CreatedTimeField, resolve_relation: RelationResolver):
    return {"created_time": {}}


@field_to_property.register
def _(field: CreatedByField, resolve_relation: RelationResolver):
    return {"created_by": {}}


@field_to_property.register
def _(field: LastEditedTimeField, resolve_relation: RelationResolver):
    return {"last_edited_time": {}}


@field_to_property.register
def _(field: LastEditedByField, resolve_relation: RelationResolver):
    return {"last_edited_by": {}}


def _no_relations(target: str) -> Optional[str]:
    return None


def schema_to_properties(
    schema: ResourceSchema,
    resolve_relation: RelationResolver = _no_relations,
) -> Dict[str, Dict[str, Any]]:
    """
    Build the ``properties`` payload for creating a Notion database.

    Relations whose target database has not been created are dropped, and
    so are rollups that depend on a dropped relation.

    Args:
        schema: Resource schema to translate
        resolve_relation: Maps a resource-type name to its Notion database id

    Returns:
        Mapping of property name to Notion property definition
    """
    fields = schema.fields or default_fields()
    translated: Dict[str, Optional[Dict[str, Any]]] = {
        name: field_to_property(field, resolve_relation)
        for name, field in fields.items()
        if not isinstance(field, RollupField)
    }

    properties: Dict[str, Dict[str, Any]] = {}
    for name, field in fields.items():
        if isinstance(field, RollupField):
            if not isinstance(fields.get(field.relation), RelationField) or translated[field.relation] is None:
                log.warning("Dropping rollup %s.%s: relation %s unavailable", schema.name, name, field.relation)
                continue
            properties[name] = field_to_property(field, resolve_relation)
        elif translated[name] is None:
            log.warning("Dropping relation %s.%s: target database not created", schema.name, name)
        else:
            properties[name] = translated[name]
    return properties


def _rich_text(value: Any) -> Dict[str, Any]:
    return {"rich_text": [{"text": {"content": str(value)}}]}


def value_to_property(field, value: Any) -> Optional[Dict[str, Any]]:
    """Translate one seed value for a field; None when the kind is not writable."""
    if isinstance(field, TitleField):
        return {"title": [{"text": {"content": str(value)}}]}
    if isinstance(field, RichTextField):
        return _rich_text(value)
    if isinstance(field, NumberField):
        return {"number": value}
    if isinstance(field, SelectField):
        return {"select": {"name": str(value)}}
    if isinstance(field, MultiSelectField):
        values = value if isinstance(value, (list, tuple)) else [value]
        return {"multi_select": [{"name": str(v)} for v in values]}
    if isinstance(field, DateField):
        return {"date": {"start": str(value)}}
    if isinstance(field, CheckboxField):
        return {"checkbox": bool(value)}
    if isinstance(field, UrlField):
        return {"url": str(value)}
    if isinstance(field, EmailField):
        return {"email": str(value)}
    if isinstance(field, PhoneNumberField):
        return {"phone_number": str(value)}
    return None


def record_to_properties(record: Mapping[str, Any], schema: ResourceSchema) -> Dict[str, Dict[str, Any]]:
    """Translate a seed record, keeping only keys the schema declares."""
    fields = schema.fields or default_fields()
    properties: Dict[str, Dict[str, Any]] = {}
    for key, value in record.items():
        field = fields.get(key)
        if field is None:
            log.debug("Skipping %s: not a property of %s", key, schema.name)
            continue
        translated = value_to_property(field, value)
        if translated is not None:
            properties[key] = translated
    return properties
