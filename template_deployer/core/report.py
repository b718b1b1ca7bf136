"""Derives a DeploymentReport from a run's state or from a saved snapshot."""
from datetime import datetime
from typing import List, Optional, Sequence
from template_deployer.core.workflow import DeploymentPhase
from template_deployer.schemas.deployment import (
    DeploymentReport,
    DeploymentSnapshot,
    DeploymentState,
    DeploymentSummary,
    utcnow,
)

SLOW_DEPLOYMENT_MS = 5 * 60 * 1000
ELEVATED_ERROR_RATE = 0.2


def recommendations_for(state: DeploymentState, deployment_time_ms: int, defaulted_schemas: Sequence[str]) -> List[str]:
    recs: List[str] = []
    errors = len(state.errors)
    if errors:
        recs.append("Review and address provisioning errors")
        attempts = len(state.created_resources) + errors
        if attempts and errors / attempts > ELEVATED_ERROR_RATE:
            recs.append("Investigate elevated error rate")
    if defaulted_schemas:
        recs.append(
            "Replace default schemas with tailored definitions: " + ", ".join(defaulted_schemas)
        )
    if deployment_time_ms > SLOW_DEPLOYMENT_MS:
        recs.append("Consider optimizing deployment process for better performance")
    if not state.created_resources:
        recs.append("Verify deployment completed successfully - no resources were tracked")
    recs.append("Set up monitoring and health checks for the deployed template")
    recs.append("Document any custom configurations for client reference")
    return recs


def build_report(
    state: DeploymentState,
    *,
    client: str,
    tier: str,
    deployment_time_ms: int,
    build_id: Optional[str] = None,
    defaulted_schemas: Sequence[str] = (),
    timestamp: Optional[datetime] = None,
) -> DeploymentReport:
    """
    Summarize a deployment run.

    Args:
        state: DeploymentState of the run
        client: Client display name
        tier: Tier identifier
        deployment_time_ms: Elapsed wall time of the run
        build_id: Build package the run deployed, when known
        defaulted_schemas: Resource types that fell back to the default schema
        timestamp: Report time; defaults to now (UTC)

    Returns:
        DeploymentReport with counts, status and recommendations
    """
    timestamp = timestamp or utcnow()
    databases = len(state.resources_of_type("database"))
    pages = len(state.resources_of_type("page"))
    summary_pages = len(state.resources_of_type("summary_page"))
    errors = len(state.errors)

    return DeploymentReport(
        success=DeploymentPhase.FINALIZED.value in state.completed_steps,
        status="Success" if errors == 0 else "Completed with errors",
        client=client,
        tier=tier,
        build_id=build_id,
        deployment_time_ms=deployment_time_ms,
        completed_steps=list(state.completed_steps),
        skipped_steps=list(state.skipped_steps),
        created_resources=len(state.created_resources),
        databases=databases,
        pages=pages,
        errors=errors,
        error_details=list(state.errors),
        resources=list(state.created_resources),
        defaulted_schemas=list(defaulted_schemas),
        recommendations=recommendations_for(state, deployment_time_ms, defaulted_schemas),
        summary=DeploymentSummary(
            databases=databases,
            pages=pages,
            summary_pages=summary_pages,
            timestamp=timestamp,
        ),
    )


def report_from_snapshot(snapshot: DeploymentSnapshot, timestamp: Optional[datetime] = None) -> DeploymentReport:
    ref = snapshot.build_package
    return build_report(
        snapshot.state,
        client=ref.client,
        tier=ref.tier,
        deployment_time_ms=snapshot.deployment_time_ms,
        build_id=ref.build_id,
        defaulted_schemas=ref.defaulted_schemas,
        timestamp=timestamp,
    )
