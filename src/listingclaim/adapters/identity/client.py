"""HTTP adapter for the identity provider's admin user API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from listingclaim.adapters.http_resilience import ResilientClient
from listingclaim.domain.ports import (
    IdentityAlreadyExists,
    IdentityOutcomeUnknown,
    IdentityProviderError,
    ProviderAccount,
)

from .schema import CreateUserRequest, ErrorPayload, UserListPayload, UserPayload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from listingclaim.config.http_resilience import ResilienceConfig
    from listingclaim.config.identity import IdentityConfig

log = getLogger(__name__)

USERS_PATH = "/admin/users"

# Failures where the request never left this process.
_NOT_SENT = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout, httpx.UnsupportedProtocol)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _parse_error(response: httpx.Response) -> ErrorPayload:
    try:
        return ErrorPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return ErrorPayload(message=response.text or response.reason_phrase)


@dataclass(slots=True)
class HttpIdentityProvider:
    config: IdentityConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def create(self, *, email: str, password: str, metadata: Mapping[str, str]) -> str:
        body = CreateUserRequest(email=email, password=password, user_metadata=dict(metadata))
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.post(USERS_PATH, json=body.model_dump())
        except _NOT_SENT as exc:
            raise IdentityProviderError(f"identity provider unreachable: {exc}") from exc
        except httpx.HTTPError as exc:
            raise IdentityOutcomeUnknown(
                f"identity provider unreachable after the request was sent: {exc}"
            ) from exc

        if not response.is_success:
            error = _parse_error(response)
            if error.is_duplicate:
                raise IdentityAlreadyExists(error.text)
            raise IdentityProviderError(f"HTTP {response.status_code}: {error.text}")

        try:
            return UserPayload.model_validate(response.json()).id
        except (ValueError, ValidationError) as exc:
            raise IdentityProviderError("identity provider returned no user id") from exc

    async def find_by_email(self, email: str) -> ProviderAccount | None:
        """Look up an account by exact (case-insensitive) email."""

        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.get(USERS_PATH, params={"email": email})
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"identity provider unreachable: {exc}") from exc

        if not response.is_success:
            error = _parse_error(response)
            raise IdentityProviderError(
                f"looking up {email} failed with HTTP {response.status_code}: {error.text}"
            )
        try:
            users = UserListPayload.model_validate(response.json()).users
        except (ValueError, ValidationError) as exc:
            raise IdentityProviderError("identity provider returned an unreadable user list") from exc

        wanted = email.lower()
        for user in users:
            if user.email is not None and user.email.lower() == wanted:
                return ProviderAccount(id=user.id, email=user.email, metadata=user.user_metadata)
        return None

    async def delete(self, account_id: str) -> None:
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.delete(f"{USERS_PATH}/{account_id}")
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"identity provider unreachable: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            log.info("Account %s was already deleted", account_id)
            return
        if not response.is_success:
            error = _parse_error(response)
            raise IdentityProviderError(
                f"deleting {account_id} failed with HTTP {response.status_code}: {error.text}"
            )
        log.info("Deleted account %s", account_id)
