from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

class DeploymentPhase(str, Enum):
    INITIALIZING = "INITIALIZING"
    ARTIFACTS_LOADED = "ARTIFACTS_LOADED"
    CONNECTED = "CONNECTED"
    DATABASES_DEPLOYED = "DATABASES_DEPLOYED"
    VIEWS_DEPLOYED = "VIEWS_DEPLOYED"
    SAMPLE_DATA_DEPLOYED = "SAMPLE_DATA_DEPLOYED"
    INTEGRATIONS_DEPLOYED = "INTEGRATIONS_DEPLOYED"
    FINALIZED = "FINALIZED"
    ABORTED = "ABORTED"

PHASE_SEQUENCE = (
    DeploymentPhase.INITIALIZING,
    DeploymentPhase.ARTIFACTS_LOADED,
    DeploymentPhase.CONNECTED,
    DeploymentPhase.DATABASES_DEPLOYED,
    DeploymentPhase.VIEWS_DEPLOYED,
    DeploymentPhase.SAMPLE_DATA_DEPLOYED,
    DeploymentPhase.INTEGRATIONS_DEPLOYED,
    DeploymentPhase.FINALIZED,
)

@dataclass(frozen=True)
class PhaseResult:
    phase: DeploymentPhase
    ok: bool
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    skipped: bool = False
