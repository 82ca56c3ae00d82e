"""Ports for the stores the claim flow reads and conditionally writes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.domain.model import (
        BusinessListing,
        ClaimRequest,
        ListingStatus,
        VerificationPurpose,
        VerificationResult,
    )


@runtime_checkable
class ListingDirectory(Protocol):
    """Tenant listing store. Status writes are conditional and report affected rows."""

    async def get(self, listing_id: UUID) -> BusinessListing | None: ...

    async def transition_if_equal(
        self, listing_id: UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int: ...

    async def revert_if_equal(
        self, listing_id: UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int: ...


@runtime_checkable
class VerificationStore(Protocol):
    """Store of single-use verification codes."""

    async def validate(
        self,
        *,
        email: str,
        purpose: VerificationPurpose,
        code: str,
        listing_id: UUID,
    ) -> VerificationResult: ...

    async def consume(self, code_id: UUID) -> bool:
        """Delete the code. Returns ``False`` when it was already gone."""
        ...


@runtime_checkable
class ClaimRequestRepository(Protocol):
    """Persistence contract for claim requests."""

    def add(self, claim: ClaimRequest) -> None: ...

    async def open_for_listing(self, listing_id: UUID) -> ClaimRequest | None: ...
