"""Identity provider configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

IDENTITY_TIMEOUT_SECONDS = 10.0
CLAIMANT_ROLE = "business_owner"


@dataclass(frozen=True)
class IdentityConfig:
    """Admin API access for the identity provider."""

    base_url: str
    service_key: str
    resilience: ResilienceConfig
    claimant_role: str = CLAIMANT_ROLE


def get_identity_config(*, resilience: ResilienceConfig | None = None) -> IdentityConfig:
    values = require_env_vars(("IDENTITY_BASE_URL", "IDENTITY_SERVICE_KEY"))
    base_url = values["IDENTITY_BASE_URL"].rstrip("/")
    service_key = values["IDENTITY_SERVICE_KEY"]
    return IdentityConfig(
        base_url=base_url,
        service_key=service_key,
        resilience=resilience
        or ResilienceConfig(
            name="identity",
            base_url=base_url,
            timeout_seconds=env_float("IDENTITY_TIMEOUT_SECONDS", IDENTITY_TIMEOUT_SECONDS),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Authorization": f"Bearer {service_key}",
                "apikey": service_key,
            },
        ),
    )
