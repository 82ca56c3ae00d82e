"""Tenant resolution from the request host and the cross-tenant isolation check.

The tenant is always derived server-side. A caller cannot pick one through query
parameters or form fields; the only input is the ``Host`` header.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from listingclaim.config.logging import security_logger
from listingclaim.domain.errors import IsolationViolation

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.config.tenancy import TenancyConfig

log = logging.getLogger(__name__)


def normalize_tenant(value: str | None) -> str:
    return (value or "").strip().lower()


def _hostname(host: str | None) -> str:
    hostname = normalize_tenant(host)
    if hostname.startswith("["):
        # IPv6 literal, keep the bracketed address and drop the port
        return hostname.split("]", 1)[0] + "]"
    return hostname.split(":", 1)[0].rstrip(".")


@dataclass(frozen=True, slots=True)
class TenantResolver:
    config: TenancyConfig

    def is_fallback_host(self, hostname: str) -> bool:
        if hostname in self.config.fallback_hosts:
            return True
        return any(hostname.endswith(suffix) for suffix in self.config.fallback_suffixes)

    def resolve(self, host: str | None) -> str:
        """Return the tenant for ``host``, or ``""`` when the host names none."""

        hostname = _hostname(host)
        if not hostname:
            return ""

        base = self.config.base_domain
        suffix = f".{base}"
        if base and hostname.endswith(suffix):
            label = hostname[: -len(suffix)].rsplit(".", 1)[-1]
            if label and label not in self.config.reserved_subdomains:
                return label

        if self.is_fallback_host(hostname):
            return normalize_tenant(self.config.dev_default)

        log.debug("Host %s does not map to a tenant", hostname)
        return ""


def ensure_same_tenant(request_tenant: str | None, listing_tenant: str | None, *, listing_id: UUID) -> str:
    """Raise ``IsolationViolation`` unless both tenants are present and equal.

    Returns the normalised tenant on success.
    """

    requested = normalize_tenant(request_tenant)
    owner = normalize_tenant(listing_tenant)
    if not requested or not owner or requested != owner:
        security_logger().warning(
            "Tenant isolation violation: request tenant %r attempted to claim listing %s owned by %r",
            requested,
            listing_id,
            owner,
        )
        raise IsolationViolation(
            f"request tenant {requested!r} does not own listing {listing_id} ({owner!r})"
        )
    return requested
