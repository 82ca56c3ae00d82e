"""Claim requests and the accounts created for claimants."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

from listingclaim.domain.model.base import Entity, utcnow
from listingclaim.domain.model.enums import AssetKind, ClaimStatus, VerificationMethod

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class ClaimOverrides:
    """Listing details the claimant corrected while claiming.

    Field order matters: it is the column order of the persisted composite.
    """

    name: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    category: str | None = None
    type: str | None = None
    description: str | None = None
    tagline: str | None = None
    hours: str | None = None

    @property
    def was_edited(self) -> bool:
        return any(value is not None for value in self.__composite_values__())

    def __composite_values__(self) -> tuple[str | None, ...]:
        return tuple(getattr(self, item.name) for item in fields(self))


@dataclass(frozen=True, slots=True)
class ClaimAssets:
    logo_url: str | None = None
    hero_image_url: str | None = None

    @classmethod
    def from_uploads(cls, uploads: dict[AssetKind, str]) -> ClaimAssets:
        return cls(
            logo_url=uploads.get(AssetKind.LOGO),
            hero_image_url=uploads.get(AssetKind.HERO),
        )


@dataclass(eq=False, kw_only=True)
class ClaimRequest(Entity):
    """A claimant's request to take over a listing, awaiting operator review."""

    listing_id: UUID
    claimant_id: str
    tenant: str
    claimant_email: str
    first_name: str
    last_name: str
    business_website: str | None = None
    overrides: ClaimOverrides = field(default_factory=ClaimOverrides)
    logo_url: str | None = None
    hero_image_url: str | None = None
    status: ClaimStatus = ClaimStatus.PENDING
    verification_method: VerificationMethod = VerificationMethod.EMAIL
    submitted_at: datetime = field(default_factory=utcnow)
    was_edited: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.was_edited = self.overrides.was_edited

    @property
    def is_open(self) -> bool:
        return self.status is ClaimStatus.PENDING


@dataclass(frozen=True, slots=True)
class ClaimantAccount:
    """Account issued by the identity provider; ``id`` is opaque to us."""

    id: str
    email: str
    role: str
