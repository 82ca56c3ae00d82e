"""Optimistic claim lock on the listing status."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listingclaim.domain.errors import ClaimConflict
from listingclaim.domain.model import ListingStatus, check_transition

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.domain.ports import ListingDirectory

log = logging.getLogger(__name__)


class ClaimLockManager:
    def __init__(self, directory: ListingDirectory) -> None:
        self._directory = directory

    async def transition_if_unclaimed(self, listing_id: UUID) -> None:
        """Move the listing to ``pending_claim``; only one concurrent caller wins."""

        check_transition(ListingStatus.UNCLAIMED, ListingStatus.PENDING_CLAIM)
        affected = await self._directory.transition_if_equal(
            listing_id,
            expected=ListingStatus.UNCLAIMED,
            target=ListingStatus.PENDING_CLAIM,
        )
        if affected != 1:
            log.info("Lost claim lock on listing %s", listing_id)
            raise ClaimConflict(f"listing {listing_id} is no longer unclaimed")
        log.debug("Acquired claim lock on listing %s", listing_id)

    async def release(self, listing_id: UUID) -> bool:
        check_transition(ListingStatus.PENDING_CLAIM, ListingStatus.UNCLAIMED)
        affected = await self._directory.revert_if_equal(
            listing_id,
            expected=ListingStatus.PENDING_CLAIM,
            target=ListingStatus.UNCLAIMED,
        )
        if not affected:
            log.warning("Listing %s was not pending_claim on release; left unchanged", listing_id)
        return bool(affected)
