"""Deployment state, snapshot and report models."""
from datetime import datetime, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreatedResource(BaseModel):
    type: Literal["database", "page", "summary_page"]
    name: str
    id: str


class DeploymentError(BaseModel):
    phase: str
    resource: str
    error: str


class DeploymentState(BaseModel):
    """Mutable record of a single deployment run.

    The lists are append-only; the orchestrator that owns the run is the
    only writer.
    """
    client: Optional[str] = None
    tier: Optional[str] = None
    start_time: datetime = Field(default_factory=utcnow)
    completed_steps: List[str] = Field(default_factory=list)
    skipped_steps: List[str] = Field(default_factory=list)
    created_resources: List[CreatedResource] = Field(default_factory=list)
    errors: List[DeploymentError] = Field(default_factory=list)
    configured_views: List[str] = Field(default_factory=list)

    def record_resource(self, kind: str, name: str, remote_id: str) -> CreatedResource:
        resource = CreatedResource(type=kind, name=name, id=remote_id)
        self.created_resources.append(resource)
        return resource

    def record_error(self, phase: str, resource: str, error: str) -> DeploymentError:
        entry = DeploymentError(phase=phase, resource=resource, error=error)
        self.errors.append(entry)
        return entry

    def resources_of_type(self, kind: str) -> List[CreatedResource]:
        return [r for r in self.created_resources if r.type == kind]


class BuildReference(BaseModel):
    build_id: str
    version: str
    tier: str
    client: str
    defaulted_schemas: List[str] = Field(default_factory=list)


class DeploymentSnapshot(BaseModel):
    state: DeploymentState
    build_package: BuildReference
    deployment_time_ms: int


class DeploymentSummary(BaseModel):
    databases: int
    pages: int
    summary_pages: int
    timestamp: datetime


class DeploymentReport(BaseModel):
    success: bool
    status: str
    client: str
    tier: str
    build_id: Optional[str] = None
    deployment_time_ms: int
    completed_steps: List[str]
    skipped_steps: List[str] = Field(default_factory=list)
    created_resources: int
    databases: int
    pages: int
    errors: int
    error_details: List[DeploymentError] = Field(default_factory=list)
    resources: List[CreatedResource] = Field(default_factory=list)
    defaulted_schemas: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    summary: DeploymentSummary
