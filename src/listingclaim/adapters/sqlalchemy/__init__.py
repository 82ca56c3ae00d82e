"""SQLAlchemy adapter package for the claim service."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyClaimRequestRepository,
    SqlAlchemyListingDirectory,
    SqlAlchemyVerificationStore,
)
from .unit_of_work import SqlAlchemyClaimUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyClaimRequestRepository",
    "SqlAlchemyClaimUnitOfWork",
    "SqlAlchemyListingDirectory",
    "SqlAlchemyVerificationStore",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
