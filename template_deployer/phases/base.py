from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional
from template_deployer.core.notion import NotionClient
from template_deployer.core.pacing import Pacer
from template_deployer.core.workflow import DeploymentPhase, PhaseResult
from template_deployer.generators.template_gen.writer import ArtifactStore
from template_deployer.schemas.build import BuildPackage
from template_deployer.schemas.deployment import DeploymentState


@dataclass
class DeploymentInputs:
    client: Optional[str]
    tier: Optional[str]
    token: Optional[str]
    # None follows the build package; False disables seed data globally.
    include_sample_data: Optional[bool] = None


@dataclass
class DeploymentContext:
    """Everything a phase handler may read or mutate during one run."""
    inputs: DeploymentInputs
    state: DeploymentState
    artifacts: ArtifactStore
    client_factory: Callable[[str], NotionClient]
    pacer: Pacer
    clock: Callable[[], datetime]
    build_package: Optional[BuildPackage] = None
    notion: Optional[NotionClient] = None
    parent_page_id: Optional[str] = None
    database_ids: Dict[str, str] = field(default_factory=dict)
    snapshot_path: Optional[Path] = None

    @property
    def client_name(self) -> str:
        if self.build_package is not None:
            return self.build_package.client
        return self.inputs.client or "-"

    def log_extra(self, phase: DeploymentPhase) -> dict:
        return {"client": self.client_name, "phase": phase.value}

    def elapsed_ms(self) -> int:
        return int((self.clock() - self.state.start_time).total_seconds() * 1000)


class BasePhase:
    phase: DeploymentPhase

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        raise NotImplementedError
