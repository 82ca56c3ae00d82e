"""One-time verification codes bound to an email, purpose and listing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from listingclaim.domain.model.enums import VerificationPurpose


@dataclass(frozen=True, slots=True, kw_only=True)
class VerificationCode:
    id: UUID
    email: str
    purpose: VerificationPurpose
    code: str
    listing_id: UUID
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        reference = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return reference >= expires_at


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Outcome of validating a code; ``code_id`` is what gets consumed later."""

    valid: bool
    expires_at: datetime | None = None
    code_id: UUID | None = None
    reason: str | None = None

    @classmethod
    def rejected(cls, reason: str) -> VerificationResult:
        return cls(valid=False, reason=reason)
