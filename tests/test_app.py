from __future__ import annotations

from typing import TYPE_CHECKING

from listingclaim.adapters.sqlalchemy.unit_of_work import configured_engine, shutdown
from listingclaim.app import build_claim_saga
from listingclaim.config import (
    ClaimConfig,
    EmailConfig,
    IdentityConfig,
    NotificationConfig,
    ObjectStoreConfig,
    TenancyConfig,
)
from listingclaim.domain.model import ListingStatus
from tests.helpers.claims import make_code, make_listing, make_submission
from tests.helpers.http import resilience

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncEngine


def _configs() -> dict[str, object]:
    return {
        "tenancy": TenancyConfig(base_domain="example.com"),
        "claims": ClaimConfig(deadline_seconds=12.5),
        "identity": IdentityConfig(
            base_url="https://idp.example.com/auth/v1",
            service_key="service-key",
            resilience=resilience("identity"),
        ),
        "object_store": ObjectStoreConfig(
            upload_url="https://upload.example.com/image/upload",
            upload_preset="claims",
            resilience=resilience("object-store"),
        ),
        "notifications": NotificationConfig(
            email=EmailConfig(api_key="re_test", from_email="claims@example.com"),
            operator=None,
            resilience=resilience("notifications"),
        ),
    }


async def test_build_claim_saga_wires_configuration(sqlite_engine: AsyncEngine) -> None:
    try:
        saga = await build_claim_saga(engine=sqlite_engine, **_configs())  # type: ignore[arg-type]

        assert configured_engine() is sqlite_engine
        assert saga.deadline_seconds == 12.5
        assert [notifier.name for notifier in saga.notifiers] == ["email"]
        assert saga.tenants.resolve("north.example.com") == "north"
    finally:
        await shutdown()


async def test_built_saga_reads_listings_from_the_database(
    sqlite_engine: AsyncEngine, seed: Callable[..., Awaitable[None]]
) -> None:
    listing = make_listing(status=ListingStatus.CLAIMED)
    await seed(listings=(listing,), codes=(make_code(listing.id),))
    try:
        saga = await build_claim_saga(engine=sqlite_engine, **_configs())  # type: ignore[arg-type]

        loaded = await saga.directory.get(listing.id)
        verified = await saga.verification.validate(
            email="owner@example.com", code=make_submission(listing.id).verification_code, listing_id=listing.id
        )
    finally:
        await shutdown()

    assert loaded == listing
    assert verified.valid
