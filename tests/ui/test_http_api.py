from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from listingclaim.domain.claiming import AssetPolicy
from listingclaim.domain.model import AssetKind, ListingStatus
from listingclaim.ui.http import create_app
from tests.helpers.claims import VALID_CODE, host_for, make_harness, make_listing

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.domain.model import BusinessListing
    from tests.helpers.claims import SagaHarness

SMALL_LIMITS = AssetPolicy(max_bytes={AssetKind.LOGO: 1024, AssetKind.HERO: 2048})


def _form(listing_id: UUID, **overrides: str) -> dict[str, str]:
    form = {
        "email": "owner@example.com",
        "password": "correct horse battery staple",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "businessId": str(listing_id),
        "verificationCode": VALID_CODE,
        "website": "https://harbour.example.com",
    }
    form.update(overrides)
    return form


def _client(harness: SagaHarness, tenant: str = "north") -> TestClient:
    return TestClient(create_app(harness.saga), base_url=f"http://{host_for(tenant)}")


@pytest.fixture
def listing() -> BusinessListing:
    return make_listing()


def test_successful_claim_returns_ids(listing: BusinessListing) -> None:
    harness = make_harness(listing)

    response = _client(harness).post(
        "/api/claims",
        data=_form(listing.id, editedTagline="Best coffee on the quay"),
        files={"logo": ("logo.png", b"\x89PNG" * 10, "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Claim submitted successfully"
    assert body["claimantId"] == "user-1"
    assert body["claimId"] == str(harness.claims.items[0].id)
    assert "error" not in body
    claim = harness.claims.items[0]
    assert claim.overrides.tagline == "Best coffee on the quay"
    assert claim.logo_url is not None


def test_missing_fields_are_rejected(listing: BusinessListing) -> None:
    harness = make_harness(listing)

    response = _client(harness).post("/api/claims", data=_form(listing.id, firstName=""))

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Some required fields are missing or invalid",
    }


def test_bad_code_is_rejected(listing: BusinessListing) -> None:
    harness = make_harness(listing)

    response = _client(harness).post("/api/claims", data=_form(listing.id, verificationCode="000000"))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid or expired verification code"


def test_cross_tenant_request_is_forbidden() -> None:
    listing = make_listing(tenant="south")
    harness = make_harness(listing)

    response = _client(harness, tenant="north").post("/api/claims", data=_form(listing.id))

    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Access denied"}
    assert harness.directory.transitions == []


def test_claimed_listing_conflicts() -> None:
    listing = make_listing(status=ListingStatus.CLAIMED)
    harness = make_harness(listing)

    response = _client(harness).post("/api/claims", data=_form(listing.id))

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_oversized_hero_fails_and_compensates(listing: BusinessListing) -> None:
    harness = make_harness(listing, policy=SMALL_LIMITS)

    response = _client(harness).post(
        "/api/claims",
        data=_form(listing.id),
        files={"heroImage": ("hero.jpg", b"\xff" * 4096, "image/jpeg")},
    )

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert harness.directory.status_of(listing.id) is ListingStatus.UNCLAIMED
    assert harness.identity.deleted == ["user-1"]


def test_unexpected_failure_returns_generic_error(
    listing: BusinessListing, monkeypatch: pytest.MonkeyPatch
) -> None:
    harness = make_harness(listing)

    async def broken_get(listing_id: UUID) -> BusinessListing | None:
        raise RuntimeError(f"connection reset while reading {listing_id}")

    monkeypatch.setattr(harness.directory, "get", broken_get)

    response = _client(harness).post("/api/claims", data=_form(listing.id))

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "An unexpected error occurred"}


def test_health() -> None:
    harness = make_harness(make_listing())

    response = _client(harness).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
