"""Persistence of the claim request record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listingclaim.domain.errors import PersistenceError
from listingclaim.domain.model import ClaimRequest

if TYPE_CHECKING:
    from collections.abc import Callable

    from listingclaim.domain.claiming.submission import ClaimSubmission
    from listingclaim.domain.model import ClaimantAccount, ClaimAssets
    from listingclaim.domain.ports import ClaimUnitOfWorkFactory

log = logging.getLogger(__name__)


class ClaimRecordWriter:
    def __init__(self, unit_of_work: ClaimUnitOfWorkFactory) -> None:
        self._unit_of_work = unit_of_work

    async def write(
        self,
        submission: ClaimSubmission,
        *,
        account: ClaimantAccount,
        tenant: str,
        assets: ClaimAssets,
        on_commit: Callable[[ClaimRequest], None] | None = None,
    ) -> ClaimRequest:
        """Persist a pending claim.

        ``on_commit`` runs synchronously right after the commit succeeds, before the
        unit of work is closed, so callers can mark the claim durable without an
        intervening await.
        """
        claim = ClaimRequest(
            listing_id=submission.listing_id,
            claimant_id=account.id,
            tenant=tenant,
            claimant_email=submission.email,
            first_name=submission.first_name,
            last_name=submission.last_name,
            business_website=submission.website,
            overrides=submission.overrides,
            logo_url=assets.logo_url,
            hero_image_url=assets.hero_image_url,
        )
        try:
            async with self._unit_of_work() as uow:
                uow.repositories.claims.add(claim)
                await uow.commit()
                if on_commit is not None:
                    on_commit(claim)
        except Exception as exc:
            # Uploaded assets are not deleted; the URLs are logged for cleanup.
            log.exception(
                "Writing claim for listing %s (claimant %s) failed; orphaned assets: %s",
                submission.listing_id,
                submission.email,
                [url for url in (assets.logo_url, assets.hero_image_url) if url] or "none",
            )
            raise PersistenceError(str(exc)) from exc

        log.info("Recorded claim %s for listing %s", claim.id, claim.listing_id)
        return claim
