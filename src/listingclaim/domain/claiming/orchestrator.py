"""Claim provisioning saga.

Forward steps, in order::

    resolve tenant -> validate code -> load listing -> isolation check
    -> status precheck -> lock -> provision identity -> ingest assets
    -> write claim record -> consume code -> notify

Everything from the lock up to the claim record runs under one deadline and
registers a compensation as it completes. Any failure in that window, including
expiry of the deadline and task cancellation, unwinds the compensations in
reverse before the error propagates. The stack is sealed inside the commit, so
once the record is durable nothing is undone, even if the deadline fires while
the unit of work closes. Code consumption and notifications are best effort.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from listingclaim.config.claims import DEFAULT_DEADLINE_SECONDS
from listingclaim.domain.claiming.notifications import dispatch_notifications
from listingclaim.domain.claiming.saga import CompensationStack
from listingclaim.domain.errors import ClaimConflict, DeadlineExceeded, NotFoundError
from listingclaim.domain.model import ClaimSubmitted
from listingclaim.domain.tenancy import ensure_same_tenant

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from listingclaim.domain.claiming.assets import AssetIngestor
    from listingclaim.domain.claiming.identity import IdentityProvisioner
    from listingclaim.domain.claiming.lock import ClaimLockManager
    from listingclaim.domain.claiming.records import ClaimRecordWriter
    from listingclaim.domain.claiming.submission import ClaimSubmission
    from listingclaim.domain.claiming.verification import VerificationGate
    from listingclaim.domain.model import BusinessListing, ClaimRequest
    from listingclaim.domain.ports import ListingDirectory, Notifier
    from listingclaim.domain.tenancy import TenantResolver

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClaimOutcome:
    claim_id: UUID
    claimant_id: str
    listing_id: UUID
    tenant: str
    notified: tuple[str, ...] = ()


class ClaimSaga:
    def __init__(  # noqa: PLR0913
        self,
        *,
        tenants: TenantResolver,
        directory: ListingDirectory,
        verification: VerificationGate,
        lock: ClaimLockManager,
        identity: IdentityProvisioner,
        assets: AssetIngestor,
        records: ClaimRecordWriter,
        notifiers: Sequence[Notifier] = (),
        deadline_seconds: float = DEFAULT_DEADLINE_SECONDS,
    ) -> None:
        self.tenants = tenants
        self.directory = directory
        self.verification = verification
        self.lock = lock
        self.identity = identity
        self.assets = assets
        self.records = records
        self.notifiers = tuple(notifiers)
        self.deadline_seconds = deadline_seconds

    async def submit(self, submission: ClaimSubmission, *, host: str | None) -> ClaimOutcome:
        request_tenant = self.tenants.resolve(host)
        listing_id = submission.listing_id

        verified = await self.verification.validate(
            email=submission.email,
            code=submission.verification_code,
            listing_id=listing_id,
        )

        listing = await self.directory.get(listing_id)
        if listing is None:
            raise NotFoundError(f"listing {listing_id} does not exist")
        tenant = ensure_same_tenant(request_tenant, listing.tenant, listing_id=listing_id)
        if not listing.is_claimable:
            raise ClaimConflict(f"listing {listing_id} is {listing.status.value}")

        claim = await self._provision(submission, listing=listing, tenant=tenant)

        await self.verification.consume(verified)
        notified = await dispatch_notifications(self.notifiers, ClaimSubmitted.from_claim(claim, listing))

        log.info(
            "Claim %s submitted for listing %s (%s) by %s",
            claim.id,
            listing_id,
            tenant,
            submission.email,
        )
        return ClaimOutcome(
            claim_id=claim.id,
            claimant_id=claim.claimant_id,
            listing_id=listing_id,
            tenant=tenant,
            notified=tuple(notified),
        )

    async def _provision(
        self, submission: ClaimSubmission, *, listing: BusinessListing, tenant: str
    ) -> ClaimRequest:
        compensations = CompensationStack(listing_id=listing.id, claimant_email=submission.email)
        committed: list[ClaimRequest] = []

        def mark_committed(claim: ClaimRequest) -> None:
            compensations.seal()
            committed.append(claim)

        deadline = asyncio.timeout(self.deadline_seconds)
        try:
            async with deadline:
                await self.lock.transition_if_unclaimed(listing.id)
                compensations.push("release listing lock", partial(self.lock.release, listing.id))

                account = await self.identity.provision(submission, tenant=tenant)
                compensations.push("delete claimant account", partial(self.identity.destroy, account.id))

                assets = await self.assets.ingest(submission.assets, tenant=tenant, listing_id=listing.id)
                await self.records.write(
                    submission,
                    account=account,
                    tenant=tenant,
                    assets=assets,
                    on_commit=mark_committed,
                )
        except Exception as exc:
            if compensations.sealed:
                # The record is durable; whatever failed afterwards must not undo it.
                log.warning(
                    "Claim %s for listing %s committed before %s was raised; keeping it",
                    committed[0].id,
                    listing.id,
                    type(exc).__name__,
                )
                return committed[0]
            if isinstance(exc, TimeoutError) and deadline.expired():
                log.error(
                    "Claim for listing %s by %s exceeded %ss; compensating",
                    listing.id,
                    submission.email,
                    self.deadline_seconds,
                )
                await compensations.unwind()
                raise DeadlineExceeded(f"deadline of {self.deadline_seconds}s exceeded") from exc
            await self._compensate(compensations, listing, submission, exc)
            raise
        except BaseException as exc:
            await self._compensate(compensations, listing, submission, exc)
            raise
        return committed[0]

    @staticmethod
    async def _compensate(
        compensations: CompensationStack,
        listing: BusinessListing,
        submission: ClaimSubmission,
        exc: BaseException,
    ) -> None:
        if len(compensations):
            log.warning(
                "Claim for listing %s by %s failed (%s); compensating",
                listing.id,
                submission.email,
                type(exc).__name__,
            )
        await compensations.unwind()
