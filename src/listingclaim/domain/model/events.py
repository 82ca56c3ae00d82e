"""Events emitted after a claim has been committed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from listingclaim.domain.model.claim import ClaimRequest
    from listingclaim.domain.model.listing import BusinessListing


@dataclass(frozen=True, slots=True, kw_only=True)
class ClaimSubmitted:
    """Everything a notifier may render about a freshly submitted claim."""

    claim_id: UUID
    listing_id: UUID
    listing_name: str
    tenant: str
    claimant_email: str
    first_name: str
    last_name: str
    business_website: str | None
    was_edited: bool
    submitted_at: datetime

    @classmethod
    def from_claim(cls, claim: ClaimRequest, listing: BusinessListing) -> ClaimSubmitted:
        return cls(
            claim_id=claim.id,
            listing_id=claim.listing_id,
            listing_name=listing.name,
            tenant=claim.tenant,
            claimant_email=claim.claimant_email,
            first_name=claim.first_name,
            last_name=claim.last_name,
            business_website=claim.business_website,
            was_edited=claim.was_edited,
            submitted_at=claim.submitted_at,
        )

    @property
    def claimant_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
