"""Tests for the file-backed schema store and schema validation."""
import json
import tempfile
from pathlib import Path
from template_deployer.core.config import BUNDLED_SCHEMAS_DIR
from template_deployer.generators.template_gen import compile_template
from template_deployer.generators.template_gen.schema_store import SchemaStore, humanize
from template_deployer.generators.template_gen.schema_validation import validate_schemas
from template_deployer.schemas.fields import SelectField


def test_reads_json_and_yaml():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        (root / "sites.json").write_text(json.dumps({
            "title": "Sites",
            "properties": {"Name": {"type": "title"}, "Status": {"type": "select", "options": ["Planning"]}},
        }), encoding="utf-8")
        (root / "crews.yaml").write_text(
            "title: Crews\nproperties:\n  Name:\n    type: title\n  Size:\n    type: number\n",
            encoding="utf-8",
        )
        (root / "notes.txt").write_text("ignored", encoding="utf-8")

        store = SchemaStore(root)
        names = sorted(s.name for s in store.list_schemas())
        sites = store.get("sites")
        crews = store.get("crews")

    assert names == ["crews", "sites"]
    assert isinstance(sites.fields["Status"], SelectField)
    assert list(crews.fields) == ["Name", "Size"]
    assert store.get("missing") is None


def test_missing_directory_is_empty():
    store = SchemaStore(Path("/nonexistent/schemas"))
    assert store.list_schemas() == []
    assert store.get("projects") is None


def test_unreadable_files_are_skipped():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        (root / "notes.json").write_text("{not json", encoding="utf-8")
        (root / "projects.yaml").write_text("title: [unclosed", encoding="utf-8")
        (root / "tasks.json").write_text(json.dumps({"properties": {"Name": {"type": "hologram"}}}), encoding="utf-8")
        (root / "clients.json").write_text(json.dumps({"title": "Clients", "properties": {"Name": {"type": "title"}}}), encoding="utf-8")

        store = SchemaStore(root)
        package = compile_template("Acme Co", "starter", False, store=store)

    assert [s.name for s in store.list_schemas()] == ["clients"]
    assert "projects" in package.metadata.defaulted_schemas
    assert "tasks" in package.metadata.defaulted_schemas
    assert "clients" not in package.metadata.defaulted_schemas


def test_humanize():
    assert humanize("team-members") == "Team Members"
    assert humanize("projects") == "Projects"


def test_bundled_schemas_are_valid():
    report = validate_schemas(BUNDLED_SCHEMAS_DIR)
    assert report.total == 12
    assert report.ok, [f.errors for f in report.files if not f.valid]
    assert report.warnings == []


def test_validation_reports_problems():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        (root / "projects.json").write_text(json.dumps({
            "title": "Projects",
            "properties": {
                "Name": {"type": "title"},
                "Status": {"type": "select", "options": ["Planning", "Blocked"]},
                " Padded ": {"type": "rich_text"},
            },
        }), encoding="utf-8")
        (root / "broken.json").write_text("{not json", encoding="utf-8")
        (root / "bad-field.json").write_text(json.dumps({
            "title": "Bad",
            "properties": {"Name": {"type": "title", "options": ["x"]}},
        }), encoding="utf-8")
        (root / "orphans.json").write_text(json.dumps({
            "title": "Orphans",
            "properties": {"Name": {"type": "title"}},
            "relationships": [{"target": "nowhere", "type": "one-to-many"}],
        }), encoding="utf-8")

        report = validate_schemas(root)

    results = {f.file: f for f in report.files}
    assert report.invalid == 3
    assert not report.ok
    project_errors = results["projects.json"].errors
    assert "Missing required project field: Budget" in project_errors
    assert "Missing required project field: Start Date" in project_errors
    assert "Non-standard status option: Blocked in Status" in project_errors
    assert any("whitespace" in e for e in project_errors)
    assert results["broken.json"].errors[0].startswith("Invalid document")
    assert not results["bad-field.json"].valid
    assert results["orphans.json"].valid
    assert report.warnings == ['orphans: Referenced schema "nowhere" not found']


def test_validation_of_missing_directory_warns():
    report = validate_schemas(Path("/nonexistent/schemas"))
    assert report.total == 0
    assert report.ok
    assert report.warnings
