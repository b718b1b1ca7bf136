"""Build package models produced by the template compiler."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from template_deployer.schemas.fields import ResourceSchema


class ViewKind(str, Enum):
    BOARD = "board"
    TIMELINE = "timeline"
    TABLE = "table"
    CALENDAR = "calendar"


class ViewSort(BaseModel):
    model_config = ConfigDict(frozen=True)

    property: str = "created_time"
    direction: Literal["ascending", "descending"] = "descending"


class ViewConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    filters: List[Dict[str, Any]] = Field(default_factory=list)
    sorts: List[ViewSort] = Field(default_factory=lambda: [ViewSort()])
    properties: List[str] = Field(default_factory=lambda: ["title", "status", "created_time"])
    group_by: Optional[str] = None


class ViewSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ViewKind
    databases: List[str]
    configuration: ViewConfiguration


class SelectedSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    definition: ResourceSchema
    tier: str


class IntegrationPlaceholder(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status: str = "not_configured"


class Branding(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_name: str
    logo: Optional[str] = None
    color_scheme: str = "construction-blue"


class LocaleSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    timezone: str = "UTC"
    date_format: str = "MM/DD/YYYY"
    currency: str = "USD"
    measurement_unit: str = "imperial"


class TemplateConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    client: str
    tier: str
    include_sample_data: bool
    branding: Branding
    settings: LocaleSettings = Field(default_factory=LocaleSettings)
    features: List[str]
    databases: List[str]
    views: List[str]


class BuildMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    build_duration_ms: int
    included_features: int
    database_count: int
    view_count: int
    sample_record_count: int = 0
    defaulted_schemas: List[str] = Field(default_factory=list)


class BuildPackage(BaseModel):
    """Everything one deployment run provisions. Never mutated after compile."""
    model_config = ConfigDict(frozen=True)

    build_id: str
    timestamp: datetime
    client: str
    tier: str
    version: str
    config: TemplateConfig
    schemas: List[SelectedSchema]
    views: List[ViewSpec]
    sample_data: Optional[Dict[str, List[Dict[str, Any]]]] = None
    integrations: List[IntegrationPlaceholder] = Field(default_factory=list)
    documentation: Dict[str, str] = Field(default_factory=dict)
    metadata: BuildMetadata

    def schema_for(self, name: str) -> Optional[ResourceSchema]:
        for entry in self.schemas:
            if entry.name == name:
                return entry.definition
        return None
