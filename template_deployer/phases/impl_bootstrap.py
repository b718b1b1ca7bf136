"""Precondition phases. Any failure here aborts the run."""
import logging
from template_deployer.catalog.tiers import resolve
from template_deployer.core.errors import ArtifactNotFoundError, ConfigurationError, MissingInputError
from template_deployer.core.validation import validate_client_identity
from template_deployer.core.workflow import DeploymentPhase, PhaseResult
from template_deployer.phases.base import BasePhase, DeploymentContext

log = logging.getLogger(__name__)


class InitializePhase(BasePhase):
    phase = DeploymentPhase.INITIALIZING

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        inputs = ctx.inputs
        try:
            if not inputs.client:
                raise MissingInputError("CLIENT_NAME")
            if not inputs.tier:
                raise MissingInputError("DEPLOYMENT_TIER")
            if not inputs.token:
                raise MissingInputError("NOTION_TOKEN")
            resolve(inputs.tier)
            validate_client_identity(inputs.client)
        except ConfigurationError as e:
            return PhaseResult(self.phase, False, str(e))

        return PhaseResult(
            self.phase,
            True,
            f"Environment initialized for {inputs.client} ({inputs.tier})",
        )


class LoadArtifactsPhase(BasePhase):
    phase = DeploymentPhase.ARTIFACTS_LOADED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        tier = ctx.inputs.tier
        package = ctx.build_package
        if package is None:
            try:
                package = ctx.artifacts.latest_build(tier)
            except ArtifactNotFoundError as e:
                return PhaseResult(self.phase, False, str(e))
            except Exception as e:
                return PhaseResult(self.phase, False, f"Failed to load build artifacts: {e}")
        elif package.tier != tier:
            return PhaseResult(
                self.phase,
                False,
                f"Build package tier {package.tier} does not match requested tier {tier}",
            )

        if package.client != ctx.inputs.client:
            log.warning(
                "Build package was compiled for %s, deploying it for %s",
                package.client, ctx.inputs.client,
                extra=ctx.log_extra(self.phase),
            )

        ctx.build_package = package
        return PhaseResult(
            self.phase,
            True,
            f"Loaded build package {package.build_id}: "
            f"{len(package.schemas)} databases, {len(package.views)} views",
            {"build_id": package.build_id},
        )


class ConnectPhase(BasePhase):
    phase = DeploymentPhase.CONNECTED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        try:
            notion = ctx.client_factory(ctx.inputs.token)
            user = await notion.identity_probe()
        except Exception as e:
            return PhaseResult(self.phase, False, f"Failed to connect to Notion: {e}")

        ctx.notion = notion
        name = "unknown"
        if isinstance(user, dict):
            name = user.get("name") or user.get("id") or name
        return PhaseResult(self.phase, True, f"Connected to Notion as: {name}")
