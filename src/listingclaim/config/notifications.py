"""Notification channel configuration values.

Both channels are optional: a missing API key or webhook simply disables that
channel instead of failing startup.

Each tenant named in ``NOTIFY_TENANTS`` may override either channel with
``NOTIFY_<TENANT>_...`` variables (``NOTIFY_SOUTH_OPERATOR_WEBHOOK_URL``). Any
value a tenant leaves unset falls back to the global one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .env import env_list, optional_env
from .http_resilience import ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

EMAIL_API_URL = "https://api.resend.com/emails"
DEFAULT_FROM_NAME = "Listings"
NOTIFY_TIMEOUT_SECONDS = 5.0
GLOBAL_PREFIX = "NOTIFY_"
_EMAIL_SUFFIXES = ("EMAIL_API_KEY", "EMAIL_FROM", "EMAIL_FROM_NAME", "EMAIL_API_URL")


@dataclass(frozen=True)
class EmailConfig:
    api_key: str
    from_email: str
    from_name: str = DEFAULT_FROM_NAME
    api_url: str = EMAIL_API_URL


@dataclass(frozen=True)
class OperatorWebhookConfig:
    webhook_url: str
    review_url: str | None = None


@dataclass(frozen=True)
class TenantNotificationConfig:
    email: EmailConfig | None = None
    operator: OperatorWebhookConfig | None = None


@dataclass(frozen=True)
class NotificationConfig:
    email: EmailConfig | None
    operator: OperatorWebhookConfig | None
    resilience: ResilienceConfig
    tenants: Mapping[str, TenantNotificationConfig] = field(default_factory=dict)

    def email_for(self, tenant: str) -> EmailConfig | None:
        override = self.tenants.get(tenant.lower())
        if override is not None and override.email is not None:
            return override.email
        return self.email

    def operator_for(self, tenant: str) -> OperatorWebhookConfig | None:
        override = self.tenants.get(tenant.lower())
        if override is not None and override.operator is not None:
            return override.operator
        return self.operator

    @property
    def has_email(self) -> bool:
        return self.email is not None or any(t.email is not None for t in self.tenants.values())

    @property
    def has_operator(self) -> bool:
        return self.operator is not None or any(t.operator is not None for t in self.tenants.values())


def tenant_prefix(tenant: str) -> str:
    return f"{GLOBAL_PREFIX}{re.sub(r'[^A-Z0-9]+', '_', tenant.upper())}_"


def _load_email(prefix: str, fallback: EmailConfig | None, *, from_name: str) -> EmailConfig | None:
    api_key = optional_env(f"{prefix}EMAIL_API_KEY") or (fallback.api_key if fallback else None)
    from_email = optional_env(f"{prefix}EMAIL_FROM") or (fallback.from_email if fallback else None)
    if not api_key or not from_email:
        return None
    return EmailConfig(
        api_key=api_key,
        from_email=from_email,
        from_name=optional_env(f"{prefix}EMAIL_FROM_NAME") or from_name,
        api_url=optional_env(f"{prefix}EMAIL_API_URL") or (fallback.api_url if fallback else EMAIL_API_URL),
    )


def _load_operator(prefix: str, fallback: OperatorWebhookConfig | None) -> OperatorWebhookConfig | None:
    webhook_url = optional_env(f"{prefix}OPERATOR_WEBHOOK_URL")
    if not webhook_url:
        return None
    review_url = optional_env(f"{prefix}OPERATOR_REVIEW_URL")
    if review_url is None and fallback is not None:
        review_url = fallback.review_url
    return OperatorWebhookConfig(webhook_url=webhook_url, review_url=review_url)


def _load_tenant(
    tenant: str, email: EmailConfig | None, operator: OperatorWebhookConfig | None
) -> TenantNotificationConfig:
    prefix = tenant_prefix(tenant)
    tenant_email = None
    if any(optional_env(f"{prefix}{suffix}") for suffix in _EMAIL_SUFFIXES):
        tenant_email = _load_email(
            prefix, email, from_name=email.from_name if email else f"{tenant.title()} {DEFAULT_FROM_NAME}"
        )
    return TenantNotificationConfig(email=tenant_email, operator=_load_operator(prefix, operator))


def get_notification_config(*, resilience: ResilienceConfig | None = None) -> NotificationConfig:
    email = _load_email(GLOBAL_PREFIX, None, from_name=DEFAULT_FROM_NAME)
    operator = _load_operator(GLOBAL_PREFIX, None)
    tenants = {tenant: _load_tenant(tenant, email, operator) for tenant in env_list("NOTIFY_TENANTS")}

    return NotificationConfig(
        email=email,
        operator=operator,
        resilience=resilience
        or ResilienceConfig(
            name="notifications",
            timeout_seconds=NOTIFY_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=1),
        ),
        tenants=tenants,
    )
