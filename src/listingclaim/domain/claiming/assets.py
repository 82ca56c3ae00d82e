"""Logo and hero image ingestion into the object store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from listingclaim.config.claims import (
    DEFAULT_HERO_MAX_BYTES,
    DEFAULT_LOGO_MAX_BYTES,
    IMAGE_MIME_PREFIX,
)
from listingclaim.domain.errors import UploadError
from listingclaim.domain.model import AssetKind, ClaimAssets
from listingclaim.domain.ports import ObjectStoreError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID

    from listingclaim.config.claims import ClaimConfig
    from listingclaim.domain.claiming.submission import AssetUpload
    from listingclaim.domain.ports import ObjectStore

log = logging.getLogger(__name__)


def _default_limits() -> dict[AssetKind, int]:
    return {AssetKind.LOGO: DEFAULT_LOGO_MAX_BYTES, AssetKind.HERO: DEFAULT_HERO_MAX_BYTES}


@dataclass(frozen=True, slots=True)
class AssetPolicy:
    mime_prefix: str = IMAGE_MIME_PREFIX
    max_bytes: Mapping[AssetKind, int] = field(default_factory=_default_limits)

    @classmethod
    def from_config(cls, config: ClaimConfig) -> AssetPolicy:
        return cls(
            mime_prefix=config.mime_prefix,
            max_bytes={AssetKind.LOGO: config.logo_max_bytes, AssetKind.HERO: config.hero_max_bytes},
        )

    def check(self, upload: AssetUpload) -> None:
        if not upload.mime.lower().startswith(self.mime_prefix):
            raise UploadError(f"{upload.kind.value} has unsupported type {upload.mime!r}")
        limit = self.max_bytes.get(upload.kind)
        if limit is not None and upload.size > limit:
            raise UploadError(f"{upload.kind.value} is {upload.size} bytes, limit is {limit}")


def storage_path(tenant: str, listing_id: UUID, kind: AssetKind) -> str:
    return f"{tenant}/listings/{listing_id}/{kind.value}"


class AssetIngestor:
    def __init__(self, store: ObjectStore, policy: AssetPolicy | None = None) -> None:
        self._store = store
        self.policy = policy or AssetPolicy()

    async def ingest(
        self, uploads: Iterable[AssetUpload], *, tenant: str, listing_id: UUID
    ) -> ClaimAssets:
        """Upload every asset sequentially, after checking all of them against the policy."""

        uploads = tuple(uploads)
        for upload in uploads:
            try:
                self.policy.check(upload)
            except UploadError as exc:
                log.warning("Rejected %s for listing %s: %s", upload.kind.value, listing_id, exc)
                raise

        stored: dict[AssetKind, str] = {}
        for upload in uploads:
            path = storage_path(tenant, listing_id, upload.kind)
            try:
                stored[upload.kind] = await self._store.upload(upload.data, mime=upload.mime, path=path)
            except ObjectStoreError as exc:
                log.error(
                    "Upload of %s to %s failed: %s (already stored: %s)",
                    upload.kind.value,
                    path,
                    exc,
                    sorted(stored.values()) or "none",
                )
                raise UploadError(str(exc)) from exc
            log.debug("Stored %s for listing %s at %s", upload.kind.value, listing_id, stored[upload.kind])
        return ClaimAssets.from_uploads(stored)
