"""Application configuration helpers."""

from __future__ import annotations

from .claims import ClaimConfig, get_claim_config
from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .identity import IdentityConfig, get_identity_config
from .logging import configure_logging, security_logger
from .notifications import (
    EmailConfig,
    NotificationConfig,
    OperatorWebhookConfig,
    TenantNotificationConfig,
    get_notification_config,
)
from .object_store import ObjectStoreConfig, get_object_store_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .tenancy import TenancyConfig, get_tenancy_config

__all__ = [
    "ClaimConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "EmailConfig",
    "IdentityConfig",
    "MissingConfigurationError",
    "NotificationConfig",
    "ObjectStoreConfig",
    "OperatorWebhookConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "TenancyConfig",
    "TenantNotificationConfig",
    "configure_logging",
    "get_claim_config",
    "get_database_config",
    "get_identity_config",
    "get_notification_config",
    "get_object_store_config",
    "get_storage_config",
    "get_tenancy_config",
    "require_env_vars",
    "security_logger",
]
