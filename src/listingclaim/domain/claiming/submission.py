"""Typed claim submission, validated before any collaborator is touched."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING
from uuid import UUID

from listingclaim.domain.errors import ValidationError
from listingclaim.domain.model import AssetKind, ClaimOverrides

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


def _looks_like_email(value: str) -> bool:
    local, at, domain = value.rpartition("@")
    return bool(at and local and "." in domain and not domain.startswith(".") and " " not in value)


@dataclass(frozen=True, slots=True)
class AssetUpload:
    """An uploaded file. The caller's file name is kept for logging only."""

    kind: AssetKind
    data: bytes = field(repr=False)
    mime: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True, kw_only=True)
class ClaimSubmission:
    email: str
    password: str = field(repr=False)
    first_name: str
    last_name: str
    listing_id: UUID
    verification_code: str
    website: str | None = None
    overrides: ClaimOverrides = field(default_factory=ClaimOverrides)
    assets: tuple[AssetUpload, ...] = ()

    @classmethod
    def build(  # noqa: PLR0913
        cls,
        *,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
        business_id: str | UUID | None,
        verification_code: str | None,
        website: str | None = None,
        overrides: Mapping[str, str | None] | None = None,
        assets: Iterable[AssetUpload] = (),
    ) -> ClaimSubmission:
        """Normalise raw form values into a submission.

        Raises ``ValidationError`` naming every missing or malformed field.
        """

        normalized_email = normalize_email(email)
        required = {
            "email": normalized_email,
            "password": password or "",
            "firstName": _clean(first_name),
            "lastName": _clean(last_name),
            "businessId": _clean(str(business_id)) if business_id is not None else None,
            "verificationCode": _clean(verification_code),
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValidationError(f"missing required fields: {', '.join(missing)}")
        if not _looks_like_email(normalized_email):
            raise ValidationError(f"malformed email address {normalized_email!r}")

        try:
            listing_id = business_id if isinstance(business_id, UUID) else UUID(str(business_id).strip())
        except ValueError as exc:
            raise ValidationError(f"businessId {business_id!r} is not a UUID") from exc

        return cls(
            email=normalized_email,
            password=password or "",
            first_name=required["firstName"] or "",
            last_name=required["lastName"] or "",
            listing_id=listing_id,
            verification_code=required["verificationCode"] or "",
            website=_clean(website),
            overrides=build_overrides(overrides or {}),
            assets=_collect_assets(assets),
        )


def build_overrides(values: Mapping[str, str | None]) -> ClaimOverrides:
    known = {item.name for item in fields(ClaimOverrides)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValidationError(f"unknown override fields: {', '.join(unknown)}")
    return ClaimOverrides(**{name: _clean(value) for name, value in values.items()})


def _collect_assets(assets: Iterable[AssetUpload]) -> tuple[AssetUpload, ...]:
    collected: dict[AssetKind, AssetUpload] = {}
    for upload in assets:
        if not upload.data:
            # an empty file part means the field was left blank
            continue
        if upload.kind in collected:
            raise ValidationError(f"more than one {upload.kind.value} file supplied")
        collected[upload.kind] = upload
    return tuple(collected.values())
