"""Response bodies of the claim endpoint."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ClaimResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    error: str | None = None
    message: str | None = None
    claim_id: UUID | None = Field(default=None, alias="claimId")
    claimant_id: str | None = Field(default=None, alias="claimantId")

    @classmethod
    def failure(cls, error: str) -> ClaimResponse:
        return cls(success=False, error=error)


class HealthResponse(BaseModel):
    status: str = "ok"
