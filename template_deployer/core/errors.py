"""Exception hierarchy for template compilation and deployment."""
from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from template_deployer.schemas.deployment import CreatedResource, DeploymentState


class TemplateDeployerError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TemplateDeployerError):
    """Detected before any remote call is made; never retried."""


class UnknownTierError(ConfigurationError):
    def __init__(self, tier: str):
        self.tier = tier
        super().__init__(f"Unknown tier: {tier}")


class InvalidClientIdentityError(ConfigurationError):
    pass


class MissingInputError(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} environment variable is required")


class InvalidTokenError(ConfigurationError):
    pass


class IntegrationNotAllowedError(ConfigurationError):
    def __init__(self, integration: str, tier: str):
        self.integration = integration
        self.tier = tier
        super().__init__(f"Integration '{integration}' not available in {tier} tier")


class ArtifactNotFoundError(TemplateDeployerError):
    pass


class NotionErrorKind(str, Enum):
    TIMEOUT = "timeout"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INVALID_REQUEST = "invalid_request"
    INTERNAL = "internal"
    TRANSPORT = "transport"


class NotionAPIError(TemplateDeployerError):
    def __init__(
        self,
        kind: NotionErrorKind,
        message: str,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
    ):
        self.kind = kind
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(message)


class DeploymentAbortedError(TemplateDeployerError):
    """Hard failure; carries the partial state for diagnostics."""

    def __init__(self, message: str, phase: str, state: "DeploymentState"):
        self.phase = phase
        self.state = state
        super().__init__(message)

    @property
    def cleanup_candidates(self) -> List["CreatedResource"]:
        return list(self.state.created_resources)
