"""View specifications for the template compiler."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from template_deployer.catalog.tiers import TierConfiguration, ViewDeclaration
from template_deployer.schemas.build import ViewConfiguration, ViewKind, ViewSort, ViewSpec


@dataclass(frozen=True)
class ViewTemplate:
    databases: Tuple[str, ...]
    kind: Optional[ViewKind] = None
    group_by: Optional[str] = None
    sort: ViewSort = field(default_factory=ViewSort)


VIEW_TABLE: Dict[str, ViewTemplate] = {
    "active-projects": ViewTemplate(("projects",), group_by="Status"),
    "pending-tasks": ViewTemplate(("tasks",), ViewKind.BOARD, group_by="Status"),
    "client-overview": ViewTemplate(("clients",)),
    "recent-documents": ViewTemplate(("documents",)),
    "project-dashboard": ViewTemplate(("projects", "tasks"), group_by="Status"),
    "task-kanban": ViewTemplate(("tasks",), group_by="Status"),
    "client-portal": ViewTemplate(("clients", "projects")),
    "material-inventory": ViewTemplate(("materials",)),
    "vendor-directory": ViewTemplate(("vendors",), sort=ViewSort(property="Name", direction="ascending")),
    "budget-tracking": ViewTemplate(("budgets",)),
    "expense-reports": ViewTemplate(("expenses",), sort=ViewSort(property="Date")),
    "project-timeline": ViewTemplate(("projects", "schedules"), sort=ViewSort(property="Start Date", direction="ascending")),
    "portfolio-overview": ViewTemplate(("portfolios", "projects")),
    "contract-management": ViewTemplate(("contracts",), group_by="Status"),
    "analytics-dashboard": ViewTemplate(("reports", "projects")),
    "integration-hub": ViewTemplate(("integrations",)),
}

DEFAULT_VIEW_DATABASES: Tuple[str, ...] = ("projects",)


def infer_view_kind(view_name: str) -> ViewKind:
    """Infer a display kind from a view name. Always returns a kind."""
    name = view_name.lower()
    if "kanban" in name:
        return ViewKind.BOARD
    if "timeline" in name or "schedule" in name:
        return ViewKind.TIMELINE
    if "dashboard" in name or "overview" in name:
        return ViewKind.TABLE
    if "calendar" in name:
        return ViewKind.CALENDAR
    return ViewKind.TABLE


def resolve_view_kind(declaration: ViewDeclaration) -> ViewKind:
    if declaration.kind is not None:
        return declaration.kind
    template = VIEW_TABLE.get(declaration.name)
    if template is not None and template.kind is not None:
        return template.kind
    return infer_view_kind(declaration.name)


def build_view(declaration: ViewDeclaration) -> ViewSpec:
    template = VIEW_TABLE.get(declaration.name)
    if template is None:
        template = ViewTemplate(DEFAULT_VIEW_DATABASES)

    group_by = template.group_by
    if group_by is None and "status" in declaration.name:
        group_by = "Status"

    return ViewSpec(
        name=declaration.name,
        kind=resolve_view_kind(declaration),
        databases=list(template.databases),
        configuration=ViewConfiguration(sorts=[template.sort], group_by=group_by),
    )


def build_views(tier_config: TierConfiguration) -> List[ViewSpec]:
    return [build_view(declaration) for declaration in tier_config.views]
