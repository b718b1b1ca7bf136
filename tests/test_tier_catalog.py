"""Tests for the static tier catalog."""
import pytest
from template_deployer.catalog.tiers import TIER_ORDER, resolve
from template_deployer.core.config import BUNDLED_SCHEMAS_DIR
from template_deployer.core.errors import UnknownTierError
from template_deployer.generators.template_gen.schema_store import SchemaStore


def test_tiers_are_monotonic():
    """Every resource type, view and integration of a tier is in the next tier up."""
    for lower, higher in zip(TIER_ORDER, TIER_ORDER[1:]):
        lo, hi = resolve(lower), resolve(higher)
        assert set(lo.resource_types) <= set(hi.resource_types)
        assert set(lo.integrations) <= set(hi.integrations)
        assert lo.property_count < hi.property_count
        assert lo.automation_count < hi.automation_count


def test_starter_resource_order():
    assert resolve("starter").resource_types == ("projects", "tasks", "clients", "documents", "team-members")


def test_integrations_per_tier():
    assert resolve("starter").integrations == ()
    assert resolve("professional").integrations == ("slack", "email")
    assert resolve("enterprise").integrations == ("slack", "email", "quickbooks", "custom-api")


def test_unknown_tier_raises():
    with pytest.raises(UnknownTierError) as exc:
        resolve("platinum")
    assert str(exc.value) == "Unknown tier: platinum"


def test_relation_targets_precede_dependents():
    """Bundled schemas only relate to resource types created earlier in the tier."""
    store = SchemaStore(BUNDLED_SCHEMAS_DIR)
    for tier in TIER_ORDER:
        order = resolve(tier).resource_types
        for position, name in enumerate(order):
            schema = store.get(name)
            if schema is None:
                continue
            for target in schema.relationship_targets():
                assert target in order[:position], f"{tier}: {name} relates to {target} before it exists"


def test_catalog_is_immutable():
    config = resolve("starter")
    with pytest.raises(AttributeError):
        config.property_count = 1
