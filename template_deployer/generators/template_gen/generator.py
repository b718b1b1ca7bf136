"""Template compiler: tier + client + schema store -> BuildPackage."""
import logging
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional
from template_deployer import __version__
from template_deployer.catalog.tiers import TierConfiguration, resolve
from template_deployer.core.config import settings
from template_deployer.core.validation import validate_client_identity
from template_deployer.generators.template_gen.sample_data import generate_sample_data
from template_deployer.generators.template_gen.schema_store import SchemaStore, default_schema
from template_deployer.generators.template_gen.views import build_views
from template_deployer.schemas.build import (
    Branding,
    BuildMetadata,
    BuildPackage,
    IntegrationPlaceholder,
    SelectedSchema,
    TemplateConfig,
)

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


def new_build_id(now: datetime) -> str:
    """Build ids sort by creation time: ``build-<epoch ms>-<suffix>``."""
    epoch_ms = int(now.timestamp() * 1000)
    return f"build-{epoch_ms:013d}-{uuid.uuid4().hex[:8]}"


def select_schemas(tier_config: TierConfiguration, store: SchemaStore) -> List[SelectedSchema]:
    selected = []
    for name in tier_config.resource_types:
        definition = store.get(name)
        if definition is None:
            log.warning("No schema definition for %s, using default schema", name)
            definition = default_schema(name)
        selected.append(SelectedSchema(name=name, definition=definition, tier=tier_config.tier_id))
    return selected


def generate_documentation(client: str, tier: str) -> Dict[str, str]:
    return {
        "setup": f"Setup guide for {tier} tier construction template",
        "features": f"Feature documentation for {client}",
        "api": "API integration documentation",
        "troubleshooting": "Common issues and solutions",
    }


def compile_template(
    client: str,
    tier: str,
    include_sample_data: bool,
    *,
    store: Optional[SchemaStore] = None,
    schemas_dir: Optional[Path] = None,
    clock: Optional[Clock] = None,
) -> BuildPackage:
    """
    Compile the build package for a client and tier.

    Args:
        client: Client/company name
        tier: Tier identifier (starter, professional or enterprise)
        include_sample_data: Whether to generate seed records
        store: Schema store to read definitions from
        schemas_dir: Directory for a new schema store when ``store`` is not given
        clock: Source of the build timestamp and seed dates

    Returns:
        The immutable BuildPackage

    Raises:
        InvalidClientIdentityError: client name fails policy checks
        UnknownTierError: tier is not in the catalog
    """
    started = time.perf_counter()
    client = validate_client_identity(client)
    tier_config = resolve(tier)
    now = (clock or utc_clock)()

    if store is None:
        if schemas_dir is None:
            schemas_dir = Path(settings.schemas_dir)
        store = SchemaStore(schemas_dir)

    log.info("Building %s template for %s", tier, client, extra={"client": client, "phase": "-"})

    schemas = select_schemas(tier_config, store)
    views = build_views(tier_config)
    sample_data = generate_sample_data(tier, client, now) if include_sample_data else None
    integrations = [IntegrationPlaceholder(name=name) for name in tier_config.integrations]
    defaulted = [entry.name for entry in schemas if entry.definition.defaulted]

    config = TemplateConfig(
        client=client,
        tier=tier,
        include_sample_data=include_sample_data,
        branding=Branding(company_name=client),
        features=list(tier_config.features),
        databases=list(tier_config.resource_types),
        views=list(tier_config.view_names),
    )

    package = BuildPackage(
        build_id=new_build_id(now),
        timestamp=now,
        client=client,
        tier=tier,
        version=__version__,
        config=config,
        schemas=schemas,
        views=views,
        sample_data=sample_data,
        integrations=integrations,
        documentation=generate_documentation(client, tier),
        metadata=BuildMetadata(
            build_duration_ms=int((time.perf_counter() - started) * 1000),
            included_features=len(tier_config.features),
            database_count=len(schemas),
            view_count=len(views),
            sample_record_count=sum(len(records) for records in (sample_data or {}).values()),
            defaulted_schemas=defaulted,
        ),
    )

    log.info(
        "Built %d database schemas and %d views (%d defaulted)",
        len(schemas), len(views), len(defaulted),
        extra={"client": client, "phase": "-"},
    )
    return package
