import logging
from typing import List
from template_deployer.core.workflow import DeploymentPhase, PhaseResult
from template_deployer.phases.base import BasePhase, DeploymentContext
from template_deployer.schemas.deployment import BuildReference, DeploymentSnapshot

log = logging.getLogger(__name__)


def _paragraph(text: str) -> dict:
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": [{"type": "text", "text": {"content": text}}]},
    }


def summary_blocks(ctx: DeploymentContext) -> List[dict]:
    package = ctx.build_package
    state = ctx.state
    databases = state.resources_of_type("database")
    blocks = [
        {
            "object": "block",
            "type": "heading_1",
            "heading_1": {"rich_text": [{"type": "text", "text": {"content": "Deployment Summary"}}]},
        },
        _paragraph(f"Client: {package.client}"),
        _paragraph(f"Tier: {package.tier}"),
        _paragraph(f"Build: {package.build_id} (v{package.version})"),
        _paragraph(f"Deployed: {ctx.clock().isoformat()}"),
        _paragraph(f"Databases created: {len(databases)}"),
        _paragraph(f"Views configured: {len(state.configured_views)}"),
    ]
    for database in databases:
        blocks.append(_paragraph(f"- {database.name}"))
    if state.errors:
        blocks.append(_paragraph(f"Errors: {len(state.errors)}"))
    return blocks


class FinalizePhase(BasePhase):
    """Writes the summary page (best effort) and persists the deployment snapshot."""
    phase = DeploymentPhase.FINALIZED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        package = ctx.build_package
        extra = ctx.log_extra(self.phase)

        if ctx.parent_page_id is None:
            log.warning("No parent page available, creating summary page at workspace root", extra=extra)
        try:
            page_id = await ctx.notion.create_page(
                f"{package.client} Deployment Summary",
                parent_page_id=ctx.parent_page_id,
                children=summary_blocks(ctx),
            )
            ctx.state.record_resource("summary_page", "deployment-summary", page_id)
        except Exception as e:
            log.warning("Failed to create summary page: %s", e, extra=extra)
            ctx.state.record_error(self.phase.value, "deployment-summary", str(e))

        finished = ctx.clock()
        snapshot = DeploymentSnapshot(
            state=ctx.state,
            build_package=BuildReference(
                build_id=package.build_id,
                version=package.version,
                tier=package.tier,
                client=package.client,
                defaulted_schemas=list(package.metadata.defaulted_schemas),
            ),
            deployment_time_ms=ctx.elapsed_ms(),
        )
        try:
            ctx.snapshot_path = ctx.artifacts.save_deployment(snapshot, int(finished.timestamp() * 1000))
        except OSError as e:
            return PhaseResult(self.phase, False, f"Failed to save deployment metadata: {e}")

        return PhaseResult(
            self.phase,
            True,
            "Deployment finalized",
            {"snapshot": str(ctx.snapshot_path)},
        )
