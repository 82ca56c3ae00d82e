"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ListingStatus(StrEnum):
    UNCLAIMED = "unclaimed"
    PENDING_CLAIM = "pending_claim"
    CLAIMED = "claimed"
    REJECTED = "rejected"

    def can_transition_to(self, target: ListingStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS.get(self, frozenset())


_ALLOWED_TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.UNCLAIMED: frozenset({ListingStatus.PENDING_CLAIM}),
    # pending_claim -> unclaimed only happens through saga compensation.
    ListingStatus.PENDING_CLAIM: frozenset(
        {ListingStatus.CLAIMED, ListingStatus.REJECTED, ListingStatus.UNCLAIMED}
    ),
}


class ClaimStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AssetKind(StrEnum):
    LOGO = "logo"
    HERO = "hero"


class VerificationPurpose(StrEnum):
    BUSINESS_CLAIM = "business_claim"


class VerificationMethod(StrEnum):
    EMAIL = "email"
