"""Repository implementations backed by SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select, update

from listingclaim.adapters.sqlalchemy.mappings import (
    claim_request_table,
    listing_table,
    verification_code_table,
)
from listingclaim.domain.model import (
    BusinessListing,
    ClaimRequest,
    ClaimStatus,
    VerificationCode,
    VerificationResult,
    check_transition,
    utcnow,
)

if TYPE_CHECKING:
    import uuid
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

    from listingclaim.domain.model import ListingStatus, VerificationPurpose


def _listing_from_row(row: Mapping[str, Any]) -> BusinessListing:
    return BusinessListing(
        id=row["id"],
        tenant=row["tenant"],
        status=row["status"],
        name=row["name"],
        address=row["address"],
        phone=row["phone"],
        email=row["email"],
        website=row["website"],
        category=row["category"],
    )


class SqlAlchemyListingDirectory:
    """Listing reads and conditional status writes, each in its own transaction."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def get(self, listing_id: uuid.UUID) -> BusinessListing | None:
        stmt = select(listing_table).where(listing_table.c.id == listing_id)
        async with self.engine.connect() as connection:
            row = (await connection.execute(stmt)).mappings().one_or_none()
        return _listing_from_row(row) if row is not None else None

    async def transition_if_equal(
        self, listing_id: uuid.UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int:
        return await self._compare_and_set(listing_id, expected=expected, target=target)

    async def revert_if_equal(
        self, listing_id: uuid.UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int:
        return await self._compare_and_set(listing_id, expected=expected, target=target)

    async def _compare_and_set(
        self, listing_id: uuid.UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int:
        check_transition(expected, target)
        stmt = (
            update(listing_table)
            .where(listing_table.c.id == listing_id)
            .where(listing_table.c.status == expected)
            .values(status=target, updated_at=utcnow())
        )
        async with self.engine.begin() as connection:
            result = await connection.execute(stmt)
        return result.rowcount


class SqlAlchemyVerificationStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def validate(
        self,
        *,
        email: str,
        purpose: VerificationPurpose,
        code: str,
        listing_id: uuid.UUID,
    ) -> VerificationResult:
        stmt = (
            select(verification_code_table)
            .where(verification_code_table.c.email == email.strip().lower())
            .where(verification_code_table.c.purpose == purpose)
            .where(verification_code_table.c.code == code)
            .where(verification_code_table.c.listing_id == listing_id)
            .order_by(verification_code_table.c.expires_at.desc())
            .limit(1)
        )
        async with self.engine.connect() as connection:
            row = (await connection.execute(stmt)).mappings().one_or_none()
        if row is None:
            return VerificationResult.rejected("no matching code")

        record = VerificationCode(
            id=row["id"],
            email=row["email"],
            purpose=row["purpose"],
            code=row["code"],
            listing_id=row["listing_id"],
            expires_at=row["expires_at"],
        )
        if record.is_expired():
            return VerificationResult(valid=False, expires_at=record.expires_at, reason="code expired")
        return VerificationResult(valid=True, expires_at=record.expires_at, code_id=record.id)

    async def consume(self, code_id: uuid.UUID) -> bool:
        stmt = delete(verification_code_table).where(verification_code_table.c.id == code_id)
        async with self.engine.begin() as connection:
            result = await connection.execute(stmt)
        return result.rowcount > 0


class SqlAlchemyClaimRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def add(self, claim: ClaimRequest) -> None:
        self.session.add(claim)

    async def open_for_listing(self, listing_id: uuid.UUID) -> ClaimRequest | None:
        stmt = (
            select(ClaimRequest)
            .where(claim_request_table.c.listing_id == listing_id)
            .where(claim_request_table.c.status == ClaimStatus.PENDING)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()
