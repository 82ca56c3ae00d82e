"""Public domain model surface."""

from __future__ import annotations

from listingclaim.domain.model.base import Entity, new_id, utcnow
from listingclaim.domain.model.claim import (
    ClaimantAccount,
    ClaimAssets,
    ClaimOverrides,
    ClaimRequest,
)
from listingclaim.domain.model.enums import (
    AssetKind,
    ClaimStatus,
    ListingStatus,
    VerificationMethod,
    VerificationPurpose,
)
from listingclaim.domain.model.events import ClaimSubmitted
from listingclaim.domain.model.listing import BusinessListing, check_transition
from listingclaim.domain.model.verification import VerificationCode, VerificationResult

__all__ = [
    "AssetKind",
    "BusinessListing",
    "ClaimAssets",
    "ClaimOverrides",
    "ClaimRequest",
    "ClaimStatus",
    "ClaimSubmitted",
    "ClaimantAccount",
    "Entity",
    "ListingStatus",
    "VerificationCode",
    "VerificationMethod",
    "VerificationPurpose",
    "VerificationResult",
    "check_transition",
    "new_id",
    "utcnow",
]
