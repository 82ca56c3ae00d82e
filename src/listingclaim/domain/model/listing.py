"""Business listings as seen by the claim flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from listingclaim.domain.model.enums import ListingStatus

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class BusinessListing:
    """Read-only snapshot of a directory listing.

    Listings are imported by an external process; the claim flow only ever changes
    ``status`` and does so through conditional writes on the directory, never by
    mutating a snapshot. ``tenant`` is fixed at import time.
    """

    id: UUID
    tenant: str
    status: ListingStatus
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    category: str | None = None

    @property
    def is_claimable(self) -> bool:
        return self.status is ListingStatus.UNCLAIMED


def check_transition(source: ListingStatus, target: ListingStatus) -> None:
    """Raise ``ValueError`` for status changes the listing lifecycle forbids."""

    if not source.can_transition_to(target):
        raise ValueError(f"Illegal listing transition {source.value} -> {target.value}")
