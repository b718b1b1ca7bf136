from template_deployer.catalog.tiers import (
    TIER_CATALOG,
    TIER_ORDER,
    TierConfiguration,
    ViewDeclaration,
    resolve,
)

__all__ = ["TIER_CATALOG", "TIER_ORDER", "TierConfiguration", "ViewDeclaration", "resolve"]
