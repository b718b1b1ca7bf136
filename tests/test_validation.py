"""Tests for deployment input validation."""
import pytest
from template_deployer.core.errors import (
    ConfigurationError,
    IntegrationNotAllowedError,
    InvalidClientIdentityError,
    InvalidTokenError,
    UnknownTierError,
)
from template_deployer.core.validation import (
    validate_client_identity,
    validate_custom_domain,
    validate_inputs,
    validate_integration_config,
    validate_token,
)

VALID_TOKEN = "secret_" + "A1b2" * 11


def test_client_identity():
    assert validate_client_identity(" Smith & Sons Builders ") == "Smith & Sons Builders"
    for bad in ["Acme:Co", "Acme|Co", 'Acme"Co', "Template", "x"]:
        with pytest.raises(InvalidClientIdentityError):
            validate_client_identity(bad)


def test_token_formats():
    assert validate_token(VALID_TOKEN) == VALID_TOKEN
    assert validate_token("ntn_" + "z" * 50)
    for bad in [None, "", "secret_short", "token_" + "a" * 43, "secret_" + "a" * 42 + "!"]:
        with pytest.raises(InvalidTokenError):
            validate_token(bad)


def test_custom_domain():
    assert validate_custom_domain("projects.acme-builders.com") == "projects.acme-builders.com"
    with pytest.raises(ConfigurationError):
        validate_custom_domain("not a domain")


def test_integration_config_against_tier():
    assert validate_integration_config('{"slack": {"channel": "#ops"}}', "professional") == {"slack": {"channel": "#ops"}}
    assert validate_integration_config({"quickbooks": {}}, "enterprise") == {"quickbooks": {}}

    with pytest.raises(IntegrationNotAllowedError) as exc:
        validate_integration_config({"quickbooks": {}}, "professional")
    assert exc.value.integration == "quickbooks"

    with pytest.raises(ConfigurationError):
        validate_integration_config("{broken", "professional")
    with pytest.raises(ConfigurationError):
        validate_integration_config("[1, 2]", "professional")


def test_validate_inputs_returns_tier():
    config = validate_inputs("enterprise", "Acme Co", VALID_TOKEN, custom_domain="acme.example.com")
    assert config.tier_id == "enterprise"

    with pytest.raises(UnknownTierError):
        validate_inputs("gold", "Acme Co", VALID_TOKEN)
