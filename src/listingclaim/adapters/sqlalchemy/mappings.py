"""SQLAlchemy mapping metadata for the claim flow."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
    text,
)
from sqlalchemy.orm import composite, configure_mappers

from listingclaim.domain.model import (
    ClaimOverrides,
    ClaimRequest,
    ClaimStatus,
    ListingStatus,
    VerificationMethod,
    VerificationPurpose,
    utcnow,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _value_enum(enum_type: type[StrEnum]) -> Enum:
    """Store enum values ("pending_claim"), not member names."""

    return Enum(
        enum_type,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        length=32,
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

listing_table = Table(
    "business_listing",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("tenant", String, nullable=False, index=True),
    Column("status", _value_enum(ListingStatus), nullable=False),
    Column("name", String, nullable=False),
    Column("address", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("email", String, nullable=True),
    Column("website", String, nullable=True),
    Column("category", String, nullable=True),
    Column("updated_at", UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow),
)

verification_code_table = Table(
    "verification_code",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("email", String, nullable=False),
    Column("purpose", _value_enum(VerificationPurpose), nullable=False),
    Column("code", String, nullable=False),
    Column(
        "listing_id",
        UUIDColumnType,
        ForeignKey("business_listing.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("expires_at", UTCDateTime(), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False, default=utcnow),
)

Index(
    "ix_verification_code_lookup",
    verification_code_table.c.email,
    verification_code_table.c.purpose,
    verification_code_table.c.listing_id,
)

claim_request_table = Table(
    "claim_request",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "listing_id",
        UUIDColumnType,
        ForeignKey("business_listing.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("claimant_id", String, nullable=False),
    Column("tenant", String, nullable=False),
    Column("status", _value_enum(ClaimStatus), nullable=False),
    Column("verification_method", _value_enum(VerificationMethod), nullable=False),
    Column("submitted_at", UTCDateTime(), nullable=False),
    Column("claimant_email", String, nullable=False),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("business_website", String, nullable=True),
    Column("edited_name", String, nullable=True),
    Column("edited_address", String, nullable=True),
    Column("edited_phone", String, nullable=True),
    Column("edited_website", String, nullable=True),
    Column("edited_category", String, nullable=True),
    Column("edited_type", String, nullable=True),
    Column("edited_description", String, nullable=True),
    Column("edited_tagline", String, nullable=True),
    Column("edited_hours", String, nullable=True),
    Column("logo_url", String, nullable=True),
    Column("hero_image_url", String, nullable=True),
    Column("was_edited", Boolean, nullable=False, default=False),
)

# At most one pending claim per listing.
OPEN_CLAIM_PREDICATE = "status = 'pending'"
Index(
    "uq_claim_request_open_listing",
    claim_request_table.c.listing_id,
    unique=True,
    sqlite_where=text(OPEN_CLAIM_PREDICATE),
    postgresql_where=text(OPEN_CLAIM_PREDICATE),
)

OVERRIDE_COLUMNS: tuple[str, ...] = (
    "edited_name",
    "edited_address",
    "edited_phone",
    "edited_website",
    "edited_category",
    "edited_type",
    "edited_description",
    "edited_tagline",
    "edited_hours",
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Listings and verification codes are read as frozen snapshots through Core, so
    only claim requests are mapped.
    """

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        ClaimRequest,
        claim_request_table,
        properties={
            "overrides": composite(
                ClaimOverrides,
                *(claim_request_table.c[name] for name in OVERRIDE_COLUMNS),
            ),
        },
    )

    configure_mappers()
    return mapper_registry
