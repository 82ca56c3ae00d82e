"""Claimant account provisioning."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listingclaim.config.identity import CLAIMANT_ROLE
from listingclaim.domain.errors import DuplicateAccount, ProvisioningFailed
from listingclaim.domain.model import ClaimantAccount
from listingclaim.domain.ports import (
    IdentityAlreadyExists,
    IdentityOutcomeUnknown,
    IdentityProviderError,
)

if TYPE_CHECKING:
    from listingclaim.domain.claiming.submission import ClaimSubmission
    from listingclaim.domain.ports import IdentityProvider

log = logging.getLogger(__name__)


class IdentityProvisioner:
    def __init__(self, provider: IdentityProvider, *, role: str = CLAIMANT_ROLE) -> None:
        self._provider = provider
        self.role = role

    async def provision(self, submission: ClaimSubmission, *, tenant: str) -> ClaimantAccount:
        metadata = {
            "first_name": submission.first_name,
            "last_name": submission.last_name,
            "role": self.role,
            "tenant": tenant,
            "listing_id": str(submission.listing_id),
        }
        try:
            account_id = await self._provider.create(
                email=submission.email,
                password=submission.password,
                metadata=metadata,
            )
        except IdentityAlreadyExists as exc:
            log.info("Account for %s already exists (listing %s)", submission.email, submission.listing_id)
            raise DuplicateAccount(str(exc)) from exc
        except IdentityOutcomeUnknown as exc:
            log.error(
                "Account creation for %s got no answer (listing %s): %s",
                submission.email,
                submission.listing_id,
                exc,
            )
            await self._remove_unanswered(submission.email, listing_id=metadata["listing_id"])
            raise ProvisioningFailed(str(exc)) from exc
        except IdentityProviderError as exc:
            log.error(
                "Account creation for %s failed (listing %s): %s",
                submission.email,
                submission.listing_id,
                exc,
            )
            raise ProvisioningFailed(str(exc)) from exc

        log.info("Created account %s for %s", account_id, submission.email)
        return ClaimantAccount(id=account_id, email=submission.email, role=self.role)

    async def destroy(self, account_id: str) -> None:
        await self._provider.delete(account_id)

    async def _remove_unanswered(self, email: str, *, listing_id: str) -> None:
        # Only an account stamped with this listing can come from the lost request.
        try:
            account = await self._provider.find_by_email(email)
            if account is None or account.metadata.get("listing_id") != listing_id:
                log.info("No account for %s was left behind (listing %s)", email, listing_id)
                return
            await self._provider.delete(account.id)
        except IdentityProviderError:
            log.exception(
                "Could not check for an orphaned account for %s (listing %s); "
                "manual reconciliation required",
                email,
                listing_id,
            )
            return
        log.warning("Deleted account %s left behind by an unanswered create for %s", account.id, email)
