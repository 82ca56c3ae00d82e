"""Initial schema: listings, verification codes and claim requests.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

OPEN_CLAIM_PREDICATE = "status = 'pending'"


def upgrade() -> None:
    op.create_table(
        "business_listing",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_business_listing")),
    )
    op.create_index(
        op.f("ix_business_listing_tenant"), "business_listing", ["tenant"], unique=False
    )

    op.create_table(
        "verification_code",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("purpose", sa.String(length=32), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("listing_id", sa.Uuid(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["listing_id"],
            ["business_listing.id"],
            name=op.f("fk_verification_code_listing_id_business_listing"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_verification_code")),
    )
    op.create_index(
        "ix_verification_code_lookup",
        "verification_code",
        ["email", "purpose", "listing_id"],
        unique=False,
    )

    op.create_table(
        "claim_request",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("listing_id", sa.Uuid(), nullable=False),
        sa.Column("claimant_id", sa.String(), nullable=False),
        sa.Column("tenant", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("verification_method", sa.String(length=32), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("claimant_email", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("business_website", sa.String(), nullable=True),
        sa.Column("edited_name", sa.String(), nullable=True),
        sa.Column("edited_address", sa.String(), nullable=True),
        sa.Column("edited_phone", sa.String(), nullable=True),
        sa.Column("edited_website", sa.String(), nullable=True),
        sa.Column("edited_category", sa.String(), nullable=True),
        sa.Column("edited_type", sa.String(), nullable=True),
        sa.Column("edited_description", sa.String(), nullable=True),
        sa.Column("edited_tagline", sa.String(), nullable=True),
        sa.Column("edited_hours", sa.String(), nullable=True),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("hero_image_url", sa.String(), nullable=True),
        sa.Column("was_edited", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["listing_id"],
            ["business_listing.id"],
            name=op.f("fk_claim_request_listing_id_business_listing"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_claim_request")),
    )
    op.create_index(
        "uq_claim_request_open_listing",
        "claim_request",
        ["listing_id"],
        unique=True,
        sqlite_where=sa.text(OPEN_CLAIM_PREDICATE),
        postgresql_where=sa.text(OPEN_CLAIM_PREDICATE),
    )


def downgrade() -> None:
    op.drop_index("uq_claim_request_open_listing", table_name="claim_request")
    op.drop_table("claim_request")
    op.drop_index("ix_verification_code_lookup", table_name="verification_code")
    op.drop_table("verification_code")
    op.drop_index(op.f("ix_business_listing_tenant"), table_name="business_listing")
    op.drop_table("business_listing")
