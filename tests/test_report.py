"""Tests for deployment report building and rendering."""
import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from template_deployer.core.report import build_report, report_from_snapshot
from template_deployer.generators.report_gen.render import render_html, render_markdown, save_report
from template_deployer.schemas.deployment import BuildReference, DeploymentSnapshot, DeploymentState

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _state(databases=3, errors=0):
    state = DeploymentState(client="Acme Co", tier="starter", start_time=NOW)
    state.completed_steps.extend(["INITIALIZING", "FINALIZED"])
    state.record_resource("page", "parent-page", "page-1")
    for i in range(databases):
        state.record_resource("database", f"db{i}", f"id-{i}")
    for i in range(errors):
        state.record_error("DATABASES_DEPLOYED", f"bad{i}", "validation_error")
    return state


def test_counts_and_status():
    report = build_report(_state(), client="Acme Co", tier="starter", deployment_time_ms=1200, timestamp=NOW)

    assert report.success is True
    assert report.status == "Success"
    assert report.created_resources == 4
    assert report.databases == 3
    assert report.pages == 1
    assert report.errors == 0
    assert report.recommendations[-2:] == [
        "Set up monitoring and health checks for the deployed template",
        "Document any custom configurations for client reference",
    ]


def test_error_recommendations():
    few = build_report(_state(databases=9, errors=1), client="A", tier="starter", deployment_time_ms=0)
    many = build_report(_state(databases=1, errors=2), client="A", tier="starter", deployment_time_ms=0)

    assert few.status == "Completed with errors"
    assert "Review and address provisioning errors" in few.recommendations
    assert "Investigate elevated error rate" not in few.recommendations
    assert "Investigate elevated error rate" in many.recommendations


def test_slow_and_empty_runs():
    empty = DeploymentState(client="A", tier="starter")
    report = build_report(empty, client="A", tier="starter", deployment_time_ms=6 * 60 * 1000, defaulted_schemas=["reports"])

    assert report.success is False
    assert "Consider optimizing deployment process for better performance" in report.recommendations
    assert "Verify deployment completed successfully - no resources were tracked" in report.recommendations
    assert any("reports" in r for r in report.recommendations)


def test_report_from_snapshot():
    snapshot = DeploymentSnapshot(
        state=_state(),
        build_package=BuildReference(build_id="build-1", version="1.0.0", tier="starter", client="Acme Co"),
        deployment_time_ms=321,
    )
    report = report_from_snapshot(snapshot, timestamp=NOW)
    assert report.build_id == "build-1"
    assert report.deployment_time_ms == 321
    assert report.defaulted_schemas == []


def test_report_from_snapshot_keeps_defaulted_schemas():
    ref = BuildReference(
        build_id="build-1", version="1.0.0", tier="starter", client="Acme Co", defaulted_schemas=["documents"],
    )
    snapshot = DeploymentSnapshot.model_validate_json(
        DeploymentSnapshot(state=_state(), build_package=ref, deployment_time_ms=321).model_dump_json()
    )
    report = report_from_snapshot(snapshot, timestamp=NOW)

    assert report.defaulted_schemas == ["documents"]
    assert "Replace default schemas with tailored definitions: documents" in report.recommendations


def test_markdown_and_html():
    report = build_report(_state(errors=1), client="Acme <Co>", tier="starter", deployment_time_ms=50, timestamp=NOW)

    markdown = render_markdown(report)
    assert markdown.startswith("# Deployment Report")
    assert "- **Databases:** 3" in markdown
    assert "- [DATABASES_DEPLOYED] bad0: validation_error" in markdown

    html = render_html(report)
    assert "Acme &lt;Co&gt;" in html
    assert 'class="error"' in html


def test_save_report_picks_suffix():
    report = build_report(_state(), client="Acme Co", tier="starter", deployment_time_ms=0, timestamp=NOW)
    with tempfile.TemporaryDirectory() as temp_dir:
        out = Path(temp_dir) / "deployment-report.json"
        json_path = save_report(report, out, "json")
        md_path = save_report(report, out, "markdown")
        html_path = save_report(report, out, "html")

        assert json.loads(json_path.read_text(encoding="utf-8"))["databases"] == 3
        assert md_path.suffix == ".md"
        assert html_path.suffix == ".html"
