"""Pydantic models for the unsigned image upload API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, model_validator


class ObjectStoreBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UploadResponse(ObjectStoreBaseModel):
    secure_url: str
    public_id: str | None = None
    bytes: int | None = None
    format: str | None = None


class UploadErrorPayload(ObjectStoreBaseModel):
    message: str = "upload rejected"

    @model_validator(mode="before")
    @classmethod
    def _flatten_error(cls, value: object) -> object:
        # errors arrive as {"error": {"message": "..."}}
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            nested = mapping_value.get("error")
            if isinstance(nested, Mapping):
                return nested
            if isinstance(nested, str):
                return {"message": nested}
        return value
