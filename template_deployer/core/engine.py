from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, Optional
from template_deployer.core.config import settings
from template_deployer.core.errors import DeploymentAbortedError
from template_deployer.core.notion import NotionClient
from template_deployer.core.pacing import Pacer, build_pacer
from template_deployer.core.report import build_report
from template_deployer.core.workflow import PHASE_SEQUENCE, DeploymentPhase, PhaseResult
from template_deployer.generators.template_gen.writer import ArtifactStore
from template_deployer.phases.base import DeploymentContext, DeploymentInputs
from template_deployer.phases.registry import PhaseRegistry
from template_deployer.schemas.build import BuildPackage
from template_deployer.schemas.deployment import DeploymentReport, DeploymentState, utcnow

log = logging.getLogger(__name__)


def default_client_factory(token: str) -> NotionClient:
    return NotionClient(token=token)


def default_pacer() -> Pacer:
    return build_pacer(
        settings.pacing_strategy,
        settings.database_pacing_seconds,
        settings.record_pacing_seconds,
    )


class DeploymentOrchestrator:
    """Drives one deployment run through the fixed phase sequence.

    Every call to deploy() starts a fresh DeploymentState, kept on ``state``
    afterwards. Precondition phases that fail abort the run with
    DeploymentAbortedError; per-resource failures in the provisioning phases
    are recorded on the state and the run continues.
    """

    def __init__(
        self,
        inputs: DeploymentInputs,
        artifacts: ArtifactStore,
        client_factory: Optional[Callable[[str], NotionClient]] = None,
        pacer: Optional[Pacer] = None,
        registry: Optional[PhaseRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.inputs = inputs
        self.artifacts = artifacts
        self.client_factory = client_factory or default_client_factory
        self.pacer = pacer or default_pacer()
        self.registry = registry or PhaseRegistry.default()
        self.clock = clock or utcnow
        self.state = self.new_state()
        self.phase: DeploymentPhase = DeploymentPhase.INITIALIZING

    def _abort(self, ctx: DeploymentContext, phase: DeploymentPhase, message: str) -> DeploymentAbortedError:
        extra = ctx.log_extra(phase)
        self.phase = DeploymentPhase.ABORTED
        log.error("Deployment failed: %s", message, extra=extra)
        ctx.state.record_error(phase.value, "deployment", message)
        if ctx.state.created_resources:
            log.warning("Created resources (manual cleanup may be required):", extra=extra)
            for resource in ctx.state.created_resources:
                log.warning("  %s: %s (%s)", resource.type, resource.name, resource.id, extra=extra)
        return DeploymentAbortedError(message, phase.value, ctx.state)

    def new_state(self) -> DeploymentState:
        return DeploymentState(client=self.inputs.client, tier=self.inputs.tier, start_time=self.clock())

    async def deploy(self, build_package: Optional[BuildPackage] = None) -> DeploymentReport:
        self.state = self.new_state()
        self.phase = DeploymentPhase.INITIALIZING
        ctx = DeploymentContext(
            inputs=self.inputs,
            state=self.state,
            artifacts=self.artifacts,
            client_factory=self.client_factory,
            pacer=self.pacer,
            clock=self.clock,
            build_package=build_package,
        )

        for phase in PHASE_SEQUENCE:
            self.phase = phase
            log.info("Running phase", extra=ctx.log_extra(phase))

            handler = self.registry.get(phase)
            try:
                result: PhaseResult = await handler.run(ctx)
            except Exception as e:
                log.exception("Phase raised unexpectedly", extra=ctx.log_extra(phase))
                raise self._abort(ctx, phase, f"{phase.value} failed: {e}") from e

            if not result.ok:
                raise self._abort(ctx, phase, result.message)

            if result.skipped:
                ctx.state.skipped_steps.append(phase.value)
            else:
                ctx.state.completed_steps.append(phase.value)
            log.info(result.message, extra=ctx.log_extra(phase))

        package = ctx.build_package
        report = build_report(
            ctx.state,
            client=package.client,
            tier=package.tier,
            deployment_time_ms=ctx.elapsed_ms(),
            build_id=package.build_id,
            defaulted_schemas=package.metadata.defaulted_schemas,
            timestamp=self.clock(),
        )
        log.info(
            "Deployment finished: %s (%d databases, %d errors)",
            report.status, report.databases, report.errors,
            extra=ctx.log_extra(DeploymentPhase.FINALIZED),
        )
        return report
