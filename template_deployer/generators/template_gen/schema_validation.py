"""Consistency checks for a directory of schema documents."""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import yaml
from pydantic import ValidationError
from template_deployer.generators.template_gen.schema_store import SchemaStore, read_schema_document
from template_deployer.schemas.fields import ResourceSchema, SelectField, TitleField

log = logging.getLogger(__name__)

REQUIRED_PROJECT_FIELDS = ("Name", "Status", "Budget", "Start Date")
STANDARD_STATUS_OPTIONS = ("Not Started", "Planning", "In Progress", "Completed", "On Hold", "Cancelled")
MAX_PROPERTY_NAME_LENGTH = 50


@dataclass
class FileValidation:
    file: str
    errors: List[str] = field(default_factory=list)
    schema: Optional[ResourceSchema] = None

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class SchemaValidationReport:
    files: List[FileValidation] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.files)

    @property
    def valid(self) -> int:
        return sum(1 for f in self.files if f.valid)

    @property
    def invalid(self) -> int:
        return self.total - self.valid

    @property
    def ok(self) -> bool:
        return self.invalid == 0


def _format_validation_error(e: ValidationError) -> List[str]:
    out = []
    for err in e.errors():
        loc = ".".join(str(part) for part in err["loc"])
        out.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return out


def check_conventions(schema: ResourceSchema) -> List[str]:
    """House rules on top of structural validity."""
    errors: List[str] = []
    names = list(schema.fields)

    if "project" in schema.name:
        for required in REQUIRED_PROJECT_FIELDS:
            if not any(required.lower() in n.lower() for n in names):
                errors.append(f"Missing required project field: {required}")

    titles = [n for n, f in schema.fields.items() if isinstance(f, TitleField)]
    if names and len(titles) != 1:
        errors.append(f"Expected exactly one title property, found {len(titles)}")

    for name, definition in schema.fields.items():
        if "status" in name.lower() and isinstance(definition, SelectField):
            for option in definition.options:
                if option not in STANDARD_STATUS_OPTIONS:
                    errors.append(f"Non-standard status option: {option} in {name}")
        if name != name.strip():
            errors.append(f'Property name has leading/trailing whitespace: "{name}"')
        if len(name) > MAX_PROPERTY_NAME_LENGTH:
            errors.append(f"Property name too long ({len(name)} chars): {name}")

    for name in schema.required:
        if name not in schema.fields:
            errors.append(f"Required property not declared: {name}")
    return errors


def validate_schema_file(path: Path) -> FileValidation:
    result = FileValidation(file=path.name)
    try:
        data = read_schema_document(path)
    except (ValueError, yaml.YAMLError) as e:
        result.errors.append(f"Invalid document: {e}")
        return result
    except OSError as e:
        result.errors.append(f"File read error: {e}")
        return result

    data.setdefault("name", path.stem)
    try:
        schema = ResourceSchema.model_validate(data)
    except ValidationError as e:
        result.errors.extend(_format_validation_error(e))
        return result

    result.errors.extend(check_conventions(schema))
    if result.valid:
        result.schema = schema
    return result


def validate_schemas(schemas_dir: Path) -> SchemaValidationReport:
    """
    Validate every schema document in a directory.

    Args:
        schemas_dir: Directory of ``<name>.json`` / ``<name>.yaml`` files

    Returns:
        SchemaValidationReport; dangling relationship targets are warnings
    """
    store = SchemaStore(schemas_dir)
    report = SchemaValidationReport()
    if not store.schemas_dir.is_dir():
        report.warnings.append(f"Schemas directory not found: {schemas_dir}")
        return report

    parsed: Dict[str, ResourceSchema] = {}
    for path in store.schema_files():
        result = validate_schema_file(path)
        report.files.append(result)
        log.info("%s: %s", path.name, "valid" if result.valid else "invalid")
        if result.schema is not None:
            parsed[path.stem] = result.schema

    for name, schema in parsed.items():
        for target in schema.relationship_targets():
            if target not in parsed:
                report.warnings.append(f'{name}: Referenced schema "{target}" not found')
    return report
