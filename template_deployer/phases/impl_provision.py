"""Provisioning phases. Per-resource failures are recorded, never raised."""
import logging
from typing import Optional
from template_deployer.core.pacing import DATABASE, RECORD
from template_deployer.core.workflow import DeploymentPhase, PhaseResult
from template_deployer.generators.template_gen.properties import record_to_properties, schema_to_properties
from template_deployer.phases.base import BasePhase, DeploymentContext

log = logging.getLogger(__name__)

MAX_RECORDS_PER_DATABASE = 5


def parent_page_title(client: str) -> str:
    return f"{client} Construction Management"


async def get_or_create_parent_page(ctx: DeploymentContext) -> str:
    """Find the client's parent page, creating it on first use."""
    if ctx.parent_page_id is not None:
        return ctx.parent_page_id

    title = parent_page_title(ctx.client_name)
    results = await ctx.notion.search(title, object_type="page", page_size=1)
    if results:
        ctx.parent_page_id = results[0]
    else:
        ctx.parent_page_id = await ctx.notion.create_page(title)
        ctx.state.record_resource("page", "parent-page", ctx.parent_page_id)
    return ctx.parent_page_id


class DeployDatabasesPhase(BasePhase):
    phase = DeploymentPhase.DATABASES_DEPLOYED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        package = ctx.build_package
        extra = ctx.log_extra(self.phase)
        created = 0

        for entry in package.schemas:
            log.info("Creating database: %s", entry.name, extra=extra)
            try:
                parent_id = await get_or_create_parent_page(ctx)
                properties = schema_to_properties(entry.definition, ctx.database_ids.get)
                title = f"{package.client} - {entry.definition.title or entry.name}"
                database_id = await ctx.notion.create_database(parent_id, title, properties)
            except Exception as e:
                log.error("Failed to create database %s: %s", entry.name, e, extra=extra)
                ctx.state.record_error(self.phase.value, entry.name, str(e))
                continue

            ctx.database_ids[entry.name] = database_id
            ctx.state.record_resource("database", entry.name, database_id)
            created += 1
            await ctx.pacer.pause(DATABASE)

        return PhaseResult(
            self.phase,
            True,
            f"{created}/{len(package.schemas)} databases created",
            {"created": created, "failed": len(package.schemas) - created},
        )


class ConfigureViewsPhase(BasePhase):
    """Views come with the databases; only the configuration intent is recorded."""
    phase = DeploymentPhase.VIEWS_DEPLOYED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        extra = ctx.log_extra(self.phase)
        for view in ctx.build_package.views:
            log.info("View %s (%s) on %s", view.name, view.kind.value, ", ".join(view.databases), extra=extra)
            ctx.state.configured_views.append(view.name)
        return PhaseResult(self.phase, True, f"{len(ctx.build_package.views)} views configured with databases")


class DeploySampleDataPhase(BasePhase):
    phase = DeploymentPhase.SAMPLE_DATA_DEPLOYED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        package = ctx.build_package
        if not package.sample_data or ctx.inputs.include_sample_data is False:
            return PhaseResult(self.phase, True, "Skipping sample data", skipped=True)

        extra = ctx.log_extra(self.phase)
        added = 0
        failed = 0
        for database in ctx.state.resources_of_type("database"):
            records = package.sample_data.get(database.name)
            if not records:
                continue
            schema = package.schema_for(database.name)
            batch = records[:MAX_RECORDS_PER_DATABASE]
            log.info("Adding %d sample records to %s", len(batch), database.name, extra=extra)

            for record in batch:
                record_id: Optional[str] = None
                try:
                    record_id = await ctx.notion.create_record(database.id, record_to_properties(record, schema))
                except Exception as e:
                    log.warning("Failed to add record to %s: %s", database.name, e, extra=extra)
                    ctx.state.record_error(self.phase.value, database.name, str(e))
                    failed += 1
                if record_id is not None:
                    label = record.get("Name", record_id)
                    ctx.state.record_resource("page", f"{database.name}/{label}", record_id)
                    added += 1
                await ctx.pacer.pause(RECORD)

        return PhaseResult(
            self.phase,
            True,
            f"Sample data added: {added} records ({failed} failed)",
            {"added": added, "failed": failed},
        )


class IntegrationsPhase(BasePhase):
    """Placeholder until integration provisioning exists; makes no remote calls."""
    phase = DeploymentPhase.INTEGRATIONS_DEPLOYED

    async def run(self, ctx: DeploymentContext) -> PhaseResult:
        extra = ctx.log_extra(self.phase)
        for integration in ctx.build_package.integrations:
            log.info("Integration %s: %s", integration.name, integration.status, extra=extra)
        return PhaseResult(self.phase, True, "Integrations configured")
