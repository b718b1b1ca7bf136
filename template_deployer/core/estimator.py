"""Deployment cost and time estimates derived from the tier catalog."""
import math
from typing import Dict, List
from template_deployer.catalog.tiers import TIER_ORDER, resolve
from template_deployer.generators.template_gen.sample_data import seed_record_total
from template_deployer.schemas.estimate import ComputeCost, CostBreakdown, CostEstimate, EstimatedTime

# Relative weight of each remote operation.
OPERATION_WEIGHTS: Dict[str, int] = {
    "create_database": 2,
    "create_view": 1,
    "add_property": 1,
    "setup_integration": 3,
    "create_automation": 2,
    "create_record": 1,
}

BASE_UNITS = 20
UNITS_PER_SECOND = 3
RATE_LIMIT = "3 requests/second (Notion API)"


def format_time(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m {seconds % 60}s"
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def _recommendations(tier: str, total_units: int) -> List[str]:
    recs: List[str] = []
    if total_units > 1000:
        recs.append("Consider running deployment during off-peak hours to minimize impact")
        recs.append("Monitor API rate limits closely during deployment")
    if tier == "starter":
        recs.append("Starter tier deployment should complete quickly")
        recs.append("Consider upgrading to Professional for more features")
    elif tier == "enterprise":
        recs.append("Enterprise deployment includes all features and integrations")
        recs.append("Allow extra time for complex automation setup")
    if total_units < 100:
        recs.append("This is a lightweight deployment that should complete very quickly")
    return recs


def estimate_cost(tier: str, include_sample_data: bool = True) -> CostEstimate:
    """
    Estimate the remote work a deployment of ``tier`` performs.

    Args:
        tier: Tier identifier
        include_sample_data: Whether seed records are counted

    Returns:
        CostEstimate with weighted units, time at the API rate limit and a breakdown
    """
    config = resolve(tier)
    w = OPERATION_WEIGHTS

    breakdown: Dict[str, int] = {
        "databases": len(config.resource_types) * w["create_database"],
        "views": len(config.views) * w["create_view"],
        "properties": config.property_count * w["add_property"],
        "integrations": len(config.integrations) * w["setup_integration"],
        "automations": config.automation_count * w["create_automation"],
    }
    if include_sample_data:
        breakdown["sample_data"] = seed_record_total(tier) * w["create_record"]
    breakdown["base_setup"] = BASE_UNITS

    total = sum(breakdown.values())
    seconds = math.ceil(total / UNITS_PER_SECOND)

    return CostEstimate(
        tier=tier,
        total_units=total,
        estimated_time=EstimatedTime(
            seconds=seconds,
            minutes=math.ceil(seconds / 60),
            formatted=format_time(seconds),
        ),
        breakdown=breakdown,
        rate_limit=RATE_LIMIT,
        include_sample_data=include_sample_data,
        cost=CostBreakdown(compute=ComputeCost(minutes=math.ceil(total / 60))),
        recommendations=_recommendations(tier, total),
    )


def compare_tiers(include_sample_data: bool = True) -> Dict[str, CostEstimate]:
    return {tier: estimate_cost(tier, include_sample_data) for tier in TIER_ORDER}
