from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from listingclaim.domain.model import (
    ClaimOverrides,
    ClaimRequest,
    ClaimStatus,
    ClaimSubmitted,
    ListingStatus,
    check_transition,
)
from tests.helpers.claims import make_code, make_listing


def _claim(**kwargs: object) -> ClaimRequest:
    return ClaimRequest(
        listing_id=uuid4(),
        claimant_id="user-1",
        tenant="north",
        claimant_email="owner@example.com",
        first_name="Ada",
        last_name="Lovelace",
        **kwargs,  # type: ignore[arg-type]
    )


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (ListingStatus.UNCLAIMED, ListingStatus.PENDING_CLAIM),
        (ListingStatus.PENDING_CLAIM, ListingStatus.UNCLAIMED),
        (ListingStatus.PENDING_CLAIM, ListingStatus.CLAIMED),
        (ListingStatus.PENDING_CLAIM, ListingStatus.REJECTED),
    ],
)
def test_allowed_listing_transitions(source: ListingStatus, target: ListingStatus) -> None:
    check_transition(source, target)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (ListingStatus.UNCLAIMED, ListingStatus.CLAIMED),
        (ListingStatus.CLAIMED, ListingStatus.UNCLAIMED),
        (ListingStatus.REJECTED, ListingStatus.PENDING_CLAIM),
    ],
)
def test_forbidden_listing_transitions(source: ListingStatus, target: ListingStatus) -> None:
    with pytest.raises(ValueError, match="Illegal listing transition"):
        check_transition(source, target)


def test_only_unclaimed_listings_are_claimable() -> None:
    assert make_listing().is_claimable
    assert not make_listing(status=ListingStatus.PENDING_CLAIM).is_claimable


def test_claim_defaults_and_edit_flag() -> None:
    untouched = _claim()
    edited = _claim(overrides=ClaimOverrides(hours="Mon-Fri 8-4"))

    assert untouched.status is ClaimStatus.PENDING
    assert untouched.is_open
    assert untouched.was_edited is False
    assert edited.was_edited is True
    assert _claim(status=ClaimStatus.APPROVED).is_open is False


def test_overrides_composite_values_follow_field_order() -> None:
    overrides = ClaimOverrides(name="Harbour", tagline="Coffee")

    values = overrides.__composite_values__()

    assert len(values) == 9
    assert values[0] == "Harbour"
    assert values[7] == "Coffee"


def test_claims_compare_by_identity() -> None:
    claim = _claim()

    assert claim == ClaimRequest(
        id=claim.id,
        listing_id=uuid4(),
        claimant_id="someone-else",
        tenant="south",
        claimant_email="x@example.com",
        first_name="X",
        last_name="Y",
    )
    assert claim != _claim()
    assert len({claim, claim}) == 1


def test_verification_code_expiry() -> None:
    code = make_code(uuid4(), expires_in=timedelta(minutes=5))
    now = datetime.now(UTC)

    assert not code.is_expired(now)
    assert code.is_expired(now + timedelta(minutes=6))


def test_claim_submitted_event_from_claim() -> None:
    listing = make_listing(name="Harbour Cafe")
    claim = _claim(business_website="https://harbour.example.com")

    event = ClaimSubmitted.from_claim(claim, listing)

    assert event.claim_id == claim.id
    assert event.listing_name == "Harbour Cafe"
    assert event.claimant_name == "Ada Lovelace"
    assert event.business_website == "https://harbour.example.com"
    assert event.submitted_at == claim.submitted_at
