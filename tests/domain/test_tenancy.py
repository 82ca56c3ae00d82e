from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from listingclaim.config import TenancyConfig
from listingclaim.config.logging import SECURITY_LOGGER_NAME
from listingclaim.domain.errors import IsolationViolation
from listingclaim.domain.tenancy import TenantResolver, ensure_same_tenant, normalize_tenant


@pytest.fixture
def resolver() -> TenantResolver:
    return TenantResolver(
        TenancyConfig(
            base_domain="example.com",
            fallback_suffixes=(".preview.dev",),
            dev_default="North",
        )
    )


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("north.example.com", "north"),
        ("NORTH.Example.com:443", "north"),
        ("south.example.com.", "south"),
        ("staging.south.example.com", "south"),
    ],
)
def test_resolve_reads_tenant_from_subdomain(
    resolver: TenantResolver, host: str, expected: str
) -> None:
    assert resolver.resolve(host) == expected


@pytest.mark.parametrize(
    "host",
    ["example.com", "www.example.com", "api.example.com", "north.other.org", "", None],
)
def test_resolve_returns_empty_for_hosts_without_tenant(
    resolver: TenantResolver, host: str | None
) -> None:
    assert resolver.resolve(host) == ""


def test_fallback_hosts_use_dev_default(resolver: TenantResolver) -> None:
    assert resolver.resolve("localhost:8000") == "north"
    assert resolver.resolve("branch-42.preview.dev") == "north"


def test_fallback_host_without_dev_default_has_no_tenant() -> None:
    resolver = TenantResolver(TenancyConfig(base_domain="example.com"))

    assert resolver.resolve("localhost") == ""


def test_normalize_tenant_trims_and_lowercases() -> None:
    assert normalize_tenant("  North ") == "north"
    assert normalize_tenant(None) == ""


def test_ensure_same_tenant_accepts_normalised_match() -> None:
    assert ensure_same_tenant("North", " north ", listing_id=uuid4()) == "north"


@pytest.mark.parametrize(
    ("request_tenant", "listing_tenant"),
    [("north", "south"), ("", "north"), ("north", ""), (None, None)],
)
def test_ensure_same_tenant_rejects_mismatch_and_blanks(
    request_tenant: str | None,
    listing_tenant: str | None,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.WARNING, logger=SECURITY_LOGGER_NAME)

    with pytest.raises(IsolationViolation) as exc:
        ensure_same_tenant(request_tenant, listing_tenant, listing_id=uuid4())

    assert exc.value.status_code == 403
    assert exc.value.public_message == "Access denied"
    assert any(record.name == SECURITY_LOGGER_NAME for record in caplog.records)
