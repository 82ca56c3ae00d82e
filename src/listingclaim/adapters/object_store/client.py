"""HTTP adapter for unsigned uploads to the image store."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from listingclaim.adapters.http_resilience import ResilientClient
from listingclaim.domain.ports import ObjectStoreError

from .schema import UploadErrorPayload, UploadResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from listingclaim.config.http_resilience import ResilienceConfig
    from listingclaim.config.object_store import ObjectStoreConfig

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpObjectStore:
    """Uploads under a caller-chosen public id, which the store uses as the path."""

    config: ObjectStoreConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def upload(self, data: bytes, *, mime: str, path: str) -> str:
        filename = path.rsplit("/", 1)[-1]
        form = {"upload_preset": self.config.upload_preset, "public_id": path}
        files = {"file": (filename, data, mime)}
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.post(self.config.upload_url, data=form, files=files)
        except httpx.HTTPError as exc:
            raise ObjectStoreError(f"object store unreachable: {exc}") from exc

        if not response.is_success:
            try:
                message = UploadErrorPayload.model_validate(response.json()).message
            except (ValueError, ValidationError):
                message = response.text or response.reason_phrase
            raise ObjectStoreError(f"upload of {path} failed with HTTP {response.status_code}: {message}")

        try:
            payload = UploadResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ObjectStoreError(f"upload of {path} returned no URL") from exc

        log.debug("Uploaded %s bytes to %s", len(data), payload.secure_url)
        return payload.secure_url
