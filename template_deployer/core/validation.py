"""Policy checks on deployment inputs."""
import json
import logging
import re
from typing import Any, Dict, Optional
from template_deployer.catalog.tiers import TierConfiguration, resolve
from template_deployer.core.errors import (
    ConfigurationError,
    IntegrationNotAllowedError,
    InvalidClientIdentityError,
    InvalidTokenError,
)

log = logging.getLogger(__name__)

CLIENT_MIN_LENGTH = 2
CLIENT_MAX_LENGTH = 100
UNSAFE_CLIENT_CHARS = re.compile(r'[<>:"/\\|?*]')
RESERVED_CLIENT_NAMES = {"notion", "template", "system", "admin", "api"}

# Internal integration tokens: legacy "secret_" and current "ntn_" prefixes.
TOKEN_PATTERN = re.compile(r"^(secret|ntn)_[A-Za-z0-9]{43,}$")
DOMAIN_PATTERN = re.compile(r"^(?=.{1,253}$)([A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$")


def validate_client_identity(client: Optional[str]) -> str:
    """Return the stripped client name or raise InvalidClientIdentityError."""
    name = (client or "").strip()
    if not name:
        raise InvalidClientIdentityError("Client name is required")
    if len(name) < CLIENT_MIN_LENGTH or len(name) > CLIENT_MAX_LENGTH:
        raise InvalidClientIdentityError(
            f"Client name must be between {CLIENT_MIN_LENGTH} and {CLIENT_MAX_LENGTH} characters"
        )
    if UNSAFE_CLIENT_CHARS.search(name):
        raise InvalidClientIdentityError("Client name contains invalid characters")
    if name.lower() in RESERVED_CLIENT_NAMES:
        raise InvalidClientIdentityError("Client name cannot be a reserved word")
    return name


def validate_token(token: Optional[str]) -> str:
    if not token:
        raise InvalidTokenError("Notion token is required")
    if not TOKEN_PATTERN.match(token):
        raise InvalidTokenError('Notion token must start with "secret_" or "ntn_" followed by at least 43 alphanumeric characters')
    return token


def validate_custom_domain(domain: str) -> str:
    if not DOMAIN_PATTERN.match(domain):
        raise ConfigurationError(f"Invalid custom domain: {domain}")
    return domain


def validate_integration_config(config: str | Dict[str, Any], tier: str) -> Dict[str, Any]:
    """Check that every configured integration is allowed for the tier."""
    if isinstance(config, str):
        try:
            config = json.loads(config)
        except json.JSONDecodeError:
            raise ConfigurationError("Integration configuration must be valid JSON") from None
    if not isinstance(config, dict):
        raise ConfigurationError("Integration configuration must be a JSON object")

    tier_config = resolve(tier)
    for integration in config:
        if integration not in tier_config.integrations:
            raise IntegrationNotAllowedError(integration, tier)
    return config


def validate_inputs(
    tier: str,
    client: str,
    token: str,
    custom_domain: Optional[str] = None,
    integration_config: Optional[str] = None,
) -> TierConfiguration:
    """Run every pre-deployment input check; returns the resolved tier."""
    tier_config = resolve(tier)
    validate_client_identity(client)
    validate_token(token)
    if custom_domain:
        validate_custom_domain(custom_domain)
    if integration_config:
        validate_integration_config(integration_config, tier)
    log.info("All inputs validated: %s tier for %s", tier, client)
    return tier_config
