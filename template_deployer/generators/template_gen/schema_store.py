"""File-backed store of resource schema definitions.

Each schema lives in ``<name>.json``, ``<name>.yaml`` or ``<name>.yml``; the
file stem is the resource-type name.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml
from pydantic import ValidationError
from template_deployer.schemas.fields import (
    CreatedTimeField,
    ResourceSchema,
    SelectField,
    TitleField,
)

log = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".json", ".yaml", ".yml")

DEFAULT_STATUS_OPTIONS = ["Planning", "In Progress", "Completed", "On Hold"]


def humanize(name: str) -> str:
    """Turn a resource-type name like ``team-members`` into ``Team Members``."""
    return " ".join(part.capitalize() for part in name.replace("_", "-").split("-") if part)


def default_fields() -> Dict[str, Any]:
    """Tier-agnostic fields used when a schema declares none."""
    return {
        "Name": TitleField(),
        "Status": SelectField(options=list(DEFAULT_STATUS_OPTIONS)),
        "Created": CreatedTimeField(),
    }


def default_schema(name: str) -> ResourceSchema:
    """Minimal stand-in for a resource type with no stored definition."""
    return ResourceSchema(
        name=name,
        title=humanize(name),
        fields=default_fields(),
        defaulted=True,
    )


def read_schema_document(path: Path) -> Dict[str, Any]:
    """Parse a schema file into a plain dict (JSON or YAML by suffix)."""
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: schema document must be a mapping")
    return data


def load_schema_file(path: Path) -> ResourceSchema:
    data = read_schema_document(path)
    data.setdefault("name", path.stem)
    return ResourceSchema.model_validate(data)


class SchemaStore:
    """Read-only view over a schema directory.

    A missing directory is not an error: the store is simply empty and the
    compiler falls back to default schemas. Files that fail to parse or
    validate are skipped the same way.
    """

    def __init__(self, schemas_dir: Path):
        self.schemas_dir = Path(schemas_dir)
        self._cache: Optional[Dict[str, ResourceSchema]] = None

    def schema_files(self) -> List[Path]:
        if not self.schemas_dir.is_dir():
            return []
        return sorted(
            p for p in self.schemas_dir.iterdir()
            if p.is_file() and p.suffix in SCHEMA_SUFFIXES
        )

    def _load(self) -> Dict[str, ResourceSchema]:
        if self._cache is not None:
            return self._cache

        schemas: Dict[str, ResourceSchema] = {}
        if not self.schemas_dir.is_dir():
            log.warning("Schema directory not found, using default schemas: %s", self.schemas_dir)
        for path in self.schema_files():
            if path.stem in schemas:
                log.warning("Duplicate schema definition ignored: %s", path.name)
                continue
            try:
                schemas[path.stem] = load_schema_file(path)
            except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
                log.warning("Skipping unreadable schema %s: %s", path.name, e)

        self._cache = schemas
        return schemas

    def list_schemas(self) -> List[ResourceSchema]:
        return list(self._load().values())

    def get(self, name: str) -> Optional[ResourceSchema]:
        return self._load().get(name)
