"""File-backed artifact store for build packages and deployment snapshots."""
import logging
from pathlib import Path
from typing import List, Optional
from template_deployer.core.errors import ArtifactNotFoundError
from template_deployer.schemas.build import BuildPackage
from template_deployer.schemas.deployment import DeploymentSnapshot

log = logging.getLogger(__name__)


def build_filename(tier: str, build_id: str) -> str:
    return f"template-{tier}-{build_id}.json"


class ArtifactStore:
    """Reads and writes artifacts under a dist directory.

    Layout::

        dist/template-<tier>-<build_id>.json
        dist/schemas/<name>.json
        dist/docs/README.md
        dist/deployment-<epoch ms>.json
    """

    def __init__(self, dist_dir: Path):
        self.dist_dir = Path(dist_dir)

    def save_build(self, package: BuildPackage) -> Path:
        """
        Write the build package plus its per-schema components.

        Args:
            package: Compiled BuildPackage

        Returns:
            Path of the main build package file
        """
        self.dist_dir.mkdir(parents=True, exist_ok=True)

        build_path = self.dist_dir / build_filename(package.tier, package.build_id)
        build_path.write_text(package.model_dump_json(indent=2, by_alias=True), encoding="utf-8")

        schemas_dir = self.dist_dir / "schemas"
        schemas_dir.mkdir(parents=True, exist_ok=True)
        for entry in package.schemas:
            (schemas_dir / f"{entry.name}.json").write_text(
                entry.model_dump_json(indent=2, by_alias=True), encoding="utf-8"
            )

        docs_dir = self.dist_dir / "docs"
        docs_dir.mkdir(parents=True, exist_ok=True)
        (docs_dir / "README.md").write_text(
            f"# {package.client} Construction Template\n\n"
            f"Tier: {package.tier}\n"
            f"Built: {package.timestamp.isoformat()}\n",
            encoding="utf-8",
        )

        log.info("Saved build package %s", build_path)
        return build_path

    def build_files(self, tier: str) -> List[Path]:
        if not self.dist_dir.is_dir():
            return []
        prefix = f"template-{tier}-"
        return sorted(
            p for p in self.dist_dir.iterdir()
            if p.is_file() and p.name.startswith(prefix) and p.suffix == ".json"
        )

    def latest_build(self, tier: str) -> BuildPackage:
        """Load the lexicographically latest build package for a tier."""
        if not self.dist_dir.is_dir():
            raise ArtifactNotFoundError(
                f"Build artifacts directory not found: {self.dist_dir}. Run the build command first."
            )
        files = self.build_files(tier)
        if not files:
            raise ArtifactNotFoundError(
                f"No build artifacts found for tier: {tier}. Run the build command first."
            )
        latest = files[-1]
        log.info("Loading build package %s", latest.name)
        return BuildPackage.model_validate_json(latest.read_text(encoding="utf-8"))

    def save_deployment(self, snapshot: DeploymentSnapshot, epoch_ms: int) -> Path:
        self.dist_dir.mkdir(parents=True, exist_ok=True)
        path = self.dist_dir / f"deployment-{epoch_ms:013d}.json"
        path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        log.info("Saved deployment metadata %s", path)
        return path

    def latest_deployment(self) -> Optional[DeploymentSnapshot]:
        if not self.dist_dir.is_dir():
            return None
        files = sorted(
            p for p in self.dist_dir.iterdir()
            if p.is_file() and p.name.startswith("deployment-") and p.suffix == ".json"
        )
        if not files:
            return None
        return DeploymentSnapshot.model_validate_json(files[-1].read_text(encoding="utf-8"))
