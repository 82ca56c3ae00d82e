"""Object store (image upload) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

OBJECT_STORE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class ObjectStoreConfig:
    """Unsigned upload endpoint plus the preset that scopes it."""

    upload_url: str
    upload_preset: str
    resilience: ResilienceConfig


def get_object_store_config(*, resilience: ResilienceConfig | None = None) -> ObjectStoreConfig:
    values = require_env_vars(("OBJECT_STORE_UPLOAD_URL", "OBJECT_STORE_UPLOAD_PRESET"))
    return ObjectStoreConfig(
        upload_url=values["OBJECT_STORE_UPLOAD_URL"],
        upload_preset=values["OBJECT_STORE_UPLOAD_PRESET"],
        resilience=resilience
        or ResilienceConfig(
            name="object-store",
            timeout_seconds=env_float("OBJECT_STORE_TIMEOUT_SECONDS", OBJECT_STORE_TIMEOUT_SECONDS),
            # Uploads target a server-computed public id, so replays overwrite.
            retry=RetryPolicy().allowing("POST"),
        ),
    )
