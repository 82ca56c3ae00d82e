"""Verification-code gate in front of the saga."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listingclaim.domain.errors import VerificationError
from listingclaim.domain.model import VerificationPurpose

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.domain.model import VerificationResult
    from listingclaim.domain.ports import VerificationStore

log = logging.getLogger(__name__)


class VerificationGate:
    def __init__(
        self,
        store: VerificationStore,
        *,
        purpose: VerificationPurpose = VerificationPurpose.BUSINESS_CLAIM,
    ) -> None:
        self._store = store
        self.purpose = purpose

    async def validate(self, *, email: str, code: str, listing_id: UUID) -> VerificationResult:
        result = await self._store.validate(
            email=email,
            purpose=self.purpose,
            code=code,
            listing_id=listing_id,
        )
        if not result.valid:
            log.info(
                "Verification rejected for %s on listing %s: %s",
                email,
                listing_id,
                result.reason or "no matching code",
            )
            raise VerificationError(result.reason or "no matching code")
        return result

    async def consume(self, result: VerificationResult) -> None:
        """Delete the code after the claim committed. Failures are logged, never raised."""

        if result.code_id is None:
            return
        try:
            consumed = await self._store.consume(result.code_id)
        except Exception:
            log.exception("Could not consume verification code %s; claim is kept", result.code_id)
            return
        if not consumed:
            log.debug("Verification code %s was already consumed", result.code_id)
