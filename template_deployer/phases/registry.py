from dataclasses import dataclass
from typing import Dict
from template_deployer.core.workflow import DeploymentPhase
from template_deployer.phases.base import BasePhase
from template_deployer.phases.impl_bootstrap import ConnectPhase, InitializePhase, LoadArtifactsPhase
from template_deployer.phases.impl_finalize import FinalizePhase
from template_deployer.phases.impl_provision import (
    ConfigureViewsPhase,
    DeployDatabasesPhase,
    DeploySampleDataPhase,
    IntegrationsPhase,
)

@dataclass
class PhaseRegistry:
    mapping: Dict[DeploymentPhase, BasePhase]

    def get(self, phase: DeploymentPhase) -> BasePhase:
        return self.mapping[phase]

    @staticmethod
    def default() -> "PhaseRegistry":
        return PhaseRegistry(mapping={
            DeploymentPhase.INITIALIZING: InitializePhase(),
            DeploymentPhase.ARTIFACTS_LOADED: LoadArtifactsPhase(),
            DeploymentPhase.CONNECTED: ConnectPhase(),
            DeploymentPhase.DATABASES_DEPLOYED: DeployDatabasesPhase(),
            DeploymentPhase.VIEWS_DEPLOYED: ConfigureViewsPhase(),
            DeploymentPhase.SAMPLE_DATA_DEPLOYED: DeploySampleDataPhase(),
            DeploymentPhase.INTEGRATIONS_DEPLOYED: IntegrationsPhase(),
            DeploymentPhase.FINALIZED: FinalizePhase(),
        })
