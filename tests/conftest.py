from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine

from listingclaim.adapters.sqlalchemy import start_mappers
from listingclaim.adapters.sqlalchemy.mappings import listing_table, verification_code_table
from listingclaim.adapters.sqlalchemy.migrations import upgrade_head
from listingclaim.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyClaimUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine

    from listingclaim.domain.model import BusinessListing, VerificationCode


@pytest.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    # a file database so concurrent connections see the same data
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'claims.db'}")
    start_mappers()
    await upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def sqlite_unit_of_work(
    sqlite_engine: AsyncEngine,
) -> AsyncIterator[Callable[[], SqlAlchemyClaimUnitOfWork]]:
    await startup(engine=sqlite_engine, migrate=False, force=True)

    def factory() -> SqlAlchemyClaimUnitOfWork:
        return SqlAlchemyClaimUnitOfWork()

    try:
        yield factory
    finally:
        await shutdown()


@pytest.fixture
def seed(sqlite_engine: AsyncEngine) -> Callable[..., Awaitable[None]]:
    """Insert listings and verification codes the way the import tooling would."""

    async def _seed(
        *,
        listings: tuple[BusinessListing, ...] = (),
        codes: tuple[VerificationCode, ...] = (),
    ) -> None:
        async with sqlite_engine.begin() as connection:
            for listing in listings:
                await connection.execute(
                    insert(listing_table).values(
                        id=listing.id,
                        tenant=listing.tenant,
                        status=listing.status,
                        name=listing.name,
                        address=listing.address,
                        phone=listing.phone,
                        email=listing.email,
                        website=listing.website,
                        category=listing.category,
                    )
                )
            for code in codes:
                await connection.execute(
                    insert(verification_code_table).values(
                        id=code.id,
                        email=code.email,
                        purpose=code.purpose,
                        code=code.code,
                        listing_id=code.listing_id,
                        expires_at=code.expires_at,
                    )
                )

    return _seed
