"""Pydantic models for the identity provider's admin API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

DUPLICATE_ERROR_CODES = frozenset({"email_exists", "user_already_exists"})
DUPLICATE_MESSAGE_MARKERS = ("already registered", "already been registered", "already exists")


class IdentityBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CreateUserRequest(IdentityBaseModel):
    email: str
    password: str
    email_confirm: bool = True
    user_metadata: dict[str, str]


class UserPayload(IdentityBaseModel):
    id: str
    email: str | None = None
    user_metadata: dict[str, object] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_user(cls, value: object) -> object:
        # some deployments wrap the created user as {"user": {...}}
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "id" not in mapping_value and isinstance(mapping_value.get("user"), Mapping):
                return mapping_value["user"]
        return value


class ErrorPayload(IdentityBaseModel):
    message: str | None = Field(
        default=None,
        validation_alias=AliasChoices("msg", "message", "error_description", "error"),
    )
    error_code: str | None = None

    @property
    def text(self) -> str:
        return self.message or self.error_code or "unknown error"

    @property
    def is_duplicate(self) -> bool:
        if self.error_code in DUPLICATE_ERROR_CODES:
            return True
        lowered = (self.message or "").lower()
        return any(marker in lowered for marker in DUPLICATE_MESSAGE_MARKERS)


class UserListPayload(IdentityBaseModel):
    users: list[UserPayload] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, value: object) -> object:
        if isinstance(value, list):
            return {"users": value}
        return value
