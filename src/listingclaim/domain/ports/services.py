"""Ports for the external services the claim saga drives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from listingclaim.domain.model import ClaimSubmitted


class IdentityProviderError(RuntimeError):
    """The identity provider refused or failed an account operation."""


class IdentityAlreadyExists(IdentityProviderError):
    """An account with the requested email is already registered."""


class IdentityOutcomeUnknown(IdentityProviderError):
    """The request may have reached the provider but no answer came back.

    The account may or may not exist; callers look it up by email to find out.
    """


class ObjectStoreError(RuntimeError):
    """An upload to the object store failed."""


class NotificationDeliveryError(RuntimeError):
    """A notification channel did not accept the message."""


@dataclass(frozen=True, slots=True)
class ProviderAccount:
    id: str
    email: str
    metadata: Mapping[str, object] = field(default_factory=dict)


@runtime_checkable
class IdentityProvider(Protocol):
    async def create(self, *, email: str, password: str, metadata: Mapping[str, str]) -> str:
        """Create a confirmed account and return its provider id."""
        ...

    async def delete(self, account_id: str) -> None: ...

    async def find_by_email(self, email: str) -> ProviderAccount | None: ...


@runtime_checkable
class ObjectStore(Protocol):
    async def upload(self, data: bytes, *, mime: str, path: str) -> str:
        """Store ``data`` under ``path`` and return its public URL."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """A single notification channel."""

    name: str

    async def send(self, event: ClaimSubmitted) -> None: ...
