"""Public interface for the identity provider adapter."""

from __future__ import annotations

from .client import HttpIdentityProvider
from .schema import CreateUserRequest, ErrorPayload, UserListPayload, UserPayload

__all__ = [
    "CreateUserRequest",
    "ErrorPayload",
    "HttpIdentityProvider",
    "UserListPayload",
    "UserPayload",
]
