"""Static tier catalog.

Resource types are listed in creation order. A resource type that relates
to another one must come after it, so relation targets already exist when
the dependent database is created.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from template_deployer.core.errors import UnknownTierError
from template_deployer.schemas.build import ViewKind

TIER_ORDER: Tuple[str, ...] = ("starter", "professional", "enterprise")

UNLIMITED = -1


@dataclass(frozen=True)
class ViewDeclaration:
    name: str
    kind: Optional[ViewKind] = None


@dataclass(frozen=True)
class TierConfiguration:
    tier_id: str
    resource_types: Tuple[str, ...]
    views: Tuple[ViewDeclaration, ...]
    features: Tuple[str, ...]
    integrations: Tuple[str, ...]
    property_count: int
    automation_count: int
    max_projects: int
    max_users: int

    @property
    def view_names(self) -> Tuple[str, ...]:
        return tuple(view.name for view in self.views)


_STARTER_RESOURCES = ("projects", "tasks", "clients", "documents", "team-members")
_PROFESSIONAL_RESOURCES = _STARTER_RESOURCES + ("materials", "vendors", "budgets", "expenses", "schedules")
_ENTERPRISE_RESOURCES = _PROFESSIONAL_RESOURCES + ("portfolios", "contracts", "reports", "integrations", "automations")

_PROFESSIONAL_VIEWS = (
    ViewDeclaration("project-dashboard", ViewKind.TABLE),
    ViewDeclaration("task-kanban", ViewKind.BOARD),
    ViewDeclaration("client-portal", ViewKind.TABLE),
    ViewDeclaration("material-inventory", ViewKind.TABLE),
    ViewDeclaration("vendor-directory", ViewKind.TABLE),
    ViewDeclaration("budget-tracking", ViewKind.TABLE),
    ViewDeclaration("expense-reports", ViewKind.TABLE),
    ViewDeclaration("project-timeline", ViewKind.TIMELINE),
)

TIER_CATALOG: Dict[str, TierConfiguration] = {
    "starter": TierConfiguration(
        tier_id="starter",
        resource_types=_STARTER_RESOURCES,
        views=(
            ViewDeclaration("active-projects", ViewKind.TABLE),
            ViewDeclaration("pending-tasks", ViewKind.BOARD),
            ViewDeclaration("client-overview", ViewKind.TABLE),
            ViewDeclaration("recent-documents"),
        ),
        features=(
            "basic-project-tracking",
            "task-management",
            "client-contact-management",
            "document-storage",
        ),
        integrations=(),
        property_count=40,
        automation_count=5,
        max_projects=5,
        max_users=2,
    ),
    "professional": TierConfiguration(
        tier_id="professional",
        resource_types=_PROFESSIONAL_RESOURCES,
        views=_PROFESSIONAL_VIEWS,
        features=(
            "all-starter-features",
            "material-management",
            "vendor-management",
            "budget-tracking",
            "expense-management",
            "project-scheduling",
            "reporting-dashboard",
        ),
        integrations=("slack", "email"),
        property_count=100,
        automation_count=20,
        max_projects=25,
        max_users=10,
    ),
    "enterprise": TierConfiguration(
        tier_id="enterprise",
        resource_types=_ENTERPRISE_RESOURCES,
        views=(ViewDeclaration("portfolio-overview", ViewKind.TABLE),)
        + _PROFESSIONAL_VIEWS
        + (
            ViewDeclaration("contract-management", ViewKind.TABLE),
            ViewDeclaration("analytics-dashboard", ViewKind.TABLE),
            ViewDeclaration("integration-hub"),
        ),
        features=(
            "all-professional-features",
            "portfolio-management",
            "contract-management",
            "advanced-analytics",
            "custom-integrations",
            "workflow-automation",
            "multi-project-tracking",
            "enterprise-reporting",
        ),
        integrations=("slack", "email", "quickbooks", "custom-api"),
        property_count=200,
        automation_count=40,
        max_projects=UNLIMITED,
        max_users=UNLIMITED,
    ),
}


def resolve(tier_id: str) -> TierConfiguration:
    """Look up a tier; raises UnknownTierError outside the closed set."""
    try:
        return TIER_CATALOG[tier_id]
    except KeyError:
        raise UnknownTierError(tier_id) from None
