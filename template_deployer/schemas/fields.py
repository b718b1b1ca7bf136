"""Resource schema models.

Field definitions form a closed union discriminated on ``type``. Only the
choice kinds (``select`` / ``multi_select``) carry ``options``; every other
kind forbids extra keys, so a stray ``options`` entry is rejected at load
time.
"""
from typing import Annotated, Dict, List, Literal, Optional, Union, get_args
from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FieldBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    description: Optional[str] = None


class TitleField(_FieldBase):
    type: Literal["title"] = "title"


class RichTextField(_FieldBase):
    type: Literal["rich_text"] = "rich_text"


class NumberField(_FieldBase):
    type: Literal["number"] = "number"
    format: str = "number"


class SelectField(_FieldBase):
    type: Literal["select"] = "select"
    options: List[str]

    @field_validator("options")
    @classmethod
    def _options_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("select fields need at least one option")
        return value


class MultiSelectField(_FieldBase):
    type: Literal["multi_select"] = "multi_select"
    options: List[str]

    @field_validator("options")
    @classmethod
    def _options_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("multi_select fields need at least one option")
        return value


class DateField(_FieldBase):
    type: Literal["date"] = "date"


class CheckboxField(_FieldBase):
    type: Literal["checkbox"] = "checkbox"


class UrlField(_FieldBase):
    type: Literal["url"] = "url"


class EmailField(_FieldBase):
    type: Literal["email"] = "email"


class PhoneNumberField(_FieldBase):
    type: Literal["phone_number"] = "phone_number"


class PeopleField(_FieldBase):
    type: Literal["people"] = "people"


class FilesField(_FieldBase):
    type: Literal["files"] = "files"


class FormulaField(_FieldBase):
    type: Literal["formula"] = "formula"
    expression: str


class RelationField(_FieldBase):
    type: Literal["relation"] = "relation"
    target: str


class RollupField(_FieldBase):
    type: Literal["rollup"] = "rollup"
    relation: str
    property: str
    function: str = "count"


class CreatedTimeField(_FieldBase):
    type: Literal["created_time"] = "created_time"


class CreatedByField(_FieldBase):
    type: Literal["created_by"] = "created_by"


class LastEditedTimeField(_FieldBase):
    type: Literal["last_edited_time"] = "last_edited_time"


class LastEditedByField(_FieldBase):
    type: Literal["last_edited_by"] = "last_edited_by"


FieldDefinition = Annotated[
    Union[
        TitleField,
        RichTextField,
        NumberField,
        SelectField,
        MultiSelectField,
        DateField,
        CheckboxField,
        UrlField,
        EmailField,
        PhoneNumberField,
        PeopleField,
        FilesField,
        FormulaField,
        RelationField,
        RollupField,
        CreatedTimeField,
        CreatedByField,
        LastEditedTimeField,
        LastEditedByField,
    ],
    Field(discriminator="type"),
]

FIELD_VARIANTS = get_args(get_args(FieldDefinition)[0])


class RelationshipSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str
    type: Literal["one-to-one", "one-to-many", "many-to-many"]


class ResourceSchema(BaseModel):
    """A named resource type (a Notion database) and its ordered fields."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    title: str
    description: Optional[str] = None
    fields: Dict[str, FieldDefinition] = Field(default_factory=dict, alias="properties")
    tier: Optional[Literal["starter", "professional", "enterprise"]] = None
    required: List[str] = Field(default_factory=list)
    relationships: List[RelationshipSpec] = Field(default_factory=list)
    defaulted: bool = False

    def title_field(self) -> Optional[str]:
        for field_name, definition in self.fields.items():
            if isinstance(definition, TitleField):
                return field_name
        return None

    def relationship_targets(self) -> List[str]:
        targets = [rel.target for rel in self.relationships]
        for definition in self.fields.values():
            if isinstance(definition, RelationField) and definition.target not in targets:
                targets.append(definition.target)
        return targets
