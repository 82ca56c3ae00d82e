"""Tenant resolution configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_list, optional_env, require_env_vars

DEFAULT_FALLBACK_HOSTS: tuple[str, ...] = ("localhost", "127.0.0.1", "testserver")
DEFAULT_RESERVED_SUBDOMAINS: tuple[str, ...] = ("www", "app", "api", "admin")


@dataclass(frozen=True, slots=True)
class TenancyConfig:
    """How request hosts map onto tenants.

    ``<tenant>.<base_domain>`` resolves to ``<tenant>``. Fallback hosts (local
    development, preview deployments) resolve to ``dev_default`` when set.
    """

    base_domain: str
    fallback_hosts: tuple[str, ...] = DEFAULT_FALLBACK_HOSTS
    fallback_suffixes: tuple[str, ...] = field(default_factory=tuple)
    reserved_subdomains: tuple[str, ...] = DEFAULT_RESERVED_SUBDOMAINS
    dev_default: str | None = None


def get_tenancy_config() -> TenancyConfig:
    values = require_env_vars(("TENANT_BASE_DOMAIN",))
    fallback_hosts = env_list("TENANT_FALLBACK_HOSTS") or DEFAULT_FALLBACK_HOSTS
    reserved = env_list("TENANT_RESERVED_SUBDOMAINS") or DEFAULT_RESERVED_SUBDOMAINS
    return TenancyConfig(
        base_domain=values["TENANT_BASE_DOMAIN"].lower().lstrip("."),
        fallback_hosts=fallback_hosts,
        fallback_suffixes=env_list("TENANT_FALLBACK_SUFFIXES"),
        reserved_subdomains=reserved,
        dev_default=optional_env("TENANT_DEV_DEFAULT"),
    )
