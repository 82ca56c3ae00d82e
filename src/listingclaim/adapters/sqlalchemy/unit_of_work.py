"""SQLAlchemy-backed unit of work for claim records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from listingclaim.adapters.sqlalchemy.mappings import start_mappers
from listingclaim.adapters.sqlalchemy.migrations import upgrade_head
from listingclaim.adapters.sqlalchemy.repositories import SqlAlchemyClaimRequestRepository
from listingclaim.config import get_database_config
from listingclaim.domain.ports.unit_of_work import ClaimRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncEngine


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @engine.setter
    def engine(self, value: AsyncEngine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call listingclaim.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


async def startup(
    *,
    engine: AsyncEngine | None = None,
    database_uri: str | None = None,
    migrate: bool = True,
    force: bool = False,
) -> AsyncEngine:
    """Initialise the async engine, mappers and session factory; return the engine."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        config = get_database_config()
        engine = create_async_engine(database_uri or config.uri, echo=config.echo)
    start_mappers()
    if migrate:
        await upgrade_head(engine=engine)

    _STATE.engine = engine
    return engine


def configured_engine() -> AsyncEngine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


async def shutdown() -> None:
    """Dispose the managed engine and reset state."""

    if _STATE.engine is not None:
        await _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic async SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: async_sessionmaker[AsyncSession] = _STATE.session_factory
        self._session: AsyncSession | None = None

    @abstractmethod
    def _build_repositories(self, session: AsyncSession) -> TRepositories: ...

    async def __aenter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                await self.rollback()
            await self.session.close()
        finally:
            self.session = None
        return False

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: AsyncSession | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyClaimUnitOfWork(BaseSqlAlchemyUnitOfWork[ClaimRepositories]):
    """Unit of work around a single claim record write."""

    def _build_repositories(self, session: AsyncSession) -> ClaimRepositories:
        return ClaimRepositories(claims=SqlAlchemyClaimRequestRepository(session))


if TYPE_CHECKING:
    from listingclaim.domain.ports.unit_of_work import ClaimUnitOfWork

    _uow_check: ClaimUnitOfWork = SqlAlchemyClaimUnitOfWork()
