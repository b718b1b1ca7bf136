"""Tests for the file-backed artifact store."""
import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path
import pytest
from template_deployer.core.errors import ArtifactNotFoundError
from template_deployer.generators.template_gen import ArtifactStore, compile_template
from template_deployer.schemas.deployment import BuildReference, DeploymentSnapshot, DeploymentState


def _clock(day):
    return lambda: datetime(2024, 5, day, tzinfo=timezone.utc)


def test_save_and_load_latest_build():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ArtifactStore(Path(temp_dir))
        older = compile_template("Acme Co", "starter", True, clock=_clock(1))
        newer = compile_template("Acme Co", "starter", False, clock=_clock(2))
        store.save_build(newer)
        path = store.save_build(older)

        assert path.name == f"template-starter-{older.build_id}.json"
        saved = json.loads(path.read_text(encoding="utf-8"))
        # on-disk field key is "properties"
        assert "properties" in saved["schemas"][0]["definition"]
        assert (Path(temp_dir) / "schemas" / "projects.json").is_file()
        assert (Path(temp_dir) / "docs" / "README.md").is_file()

        latest = store.latest_build("starter")

    assert latest.build_id == newer.build_id
    assert latest.schemas == newer.schemas


def test_latest_build_only_matches_tier():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ArtifactStore(Path(temp_dir))
        store.save_build(compile_template("Acme Co", "professional", False, clock=_clock(1)))

        with pytest.raises(ArtifactNotFoundError) as exc:
            store.latest_build("starter")
    assert "Run the build command first" in str(exc.value)


def test_missing_dist_directory():
    store = ArtifactStore(Path("/nonexistent/dist"))
    with pytest.raises(ArtifactNotFoundError):
        store.latest_build("starter")
    assert store.latest_deployment() is None


def test_deployment_snapshots():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ArtifactStore(Path(temp_dir))
        ref = BuildReference(build_id="build-1", version="1.0.0", tier="starter", client="Acme Co")
        first = DeploymentState(client="Acme Co", tier="starter")
        second = DeploymentState(client="Acme Co", tier="starter")
        second.record_resource("database", "projects", "db-1")

        store.save_deployment(DeploymentSnapshot(state=first, build_package=ref, deployment_time_ms=10), 1000)
        path = store.save_deployment(DeploymentSnapshot(state=second, build_package=ref, deployment_time_ms=20), 2000)

        latest = store.latest_deployment()

    assert path.name == "deployment-0000000002000.json"
    assert latest.deployment_time_ms == 20
    assert latest.state.created_resources[0].id == "db-1"
