"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ClaimRequestRepository, ListingDirectory, VerificationStore
from .services import (
    IdentityAlreadyExists,
    IdentityOutcomeUnknown,
    IdentityProvider,
    IdentityProviderError,
    NotificationDeliveryError,
    Notifier,
    ObjectStore,
    ObjectStoreError,
    ProviderAccount,
)
from .unit_of_work import (
    ClaimRepositories,
    ClaimUnitOfWork,
    ClaimUnitOfWorkFactory,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ClaimRepositories",
    "ClaimRequestRepository",
    "ClaimUnitOfWork",
    "ClaimUnitOfWorkFactory",
    "IdentityAlreadyExists",
    "IdentityOutcomeUnknown",
    "IdentityProvider",
    "IdentityProviderError",
    "ListingDirectory",
    "NotificationDeliveryError",
    "Notifier",
    "ObjectStore",
    "ObjectStoreError",
    "ProviderAccount",
    "RepositoryCollection",
    "UnitOfWork",
    "VerificationStore",
]
