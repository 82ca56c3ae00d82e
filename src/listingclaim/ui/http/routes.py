"""Claim submission endpoint."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from listingclaim.domain.claiming import AssetUpload, ClaimSaga, ClaimSubmission
from listingclaim.domain.errors import ClaimError
from listingclaim.domain.model import AssetKind

from .schemas import ClaimResponse, HealthResponse

if TYPE_CHECKING:
    from starlette.datastructures import FormData

log = getLogger(__name__)

router = APIRouter()

GENERIC_ERROR = "An unexpected error occurred"

OVERRIDE_FIELDS: dict[str, str] = {
    "editedBusinessName": "name",
    "editedAddress": "address",
    "editedPhone": "phone",
    "editedWebsite": "website",
    "editedCategory": "category",
    "editedType": "type",
    "editedDescription": "description",
    "editedTagline": "tagline",
    "editedHours": "hours",
}

FILE_FIELDS: dict[str, AssetKind] = {
    "logo": AssetKind.LOGO,
    "heroImage": AssetKind.HERO,
}


def get_saga(request: Request) -> ClaimSaga:
    return request.app.state.saga


def _text(form: FormData, name: str) -> str | None:
    value = form.get(name)
    if value is None or isinstance(value, UploadFile):
        return None
    return value


async def _assets(form: FormData) -> list[AssetUpload]:
    uploads: list[AssetUpload] = []
    for name, kind in FILE_FIELDS.items():
        value = form.get(name)
        if not isinstance(value, UploadFile):
            continue
        data = await value.read()
        uploads.append(
            AssetUpload(
                kind=kind,
                data=data,
                mime=value.content_type or "application/octet-stream",
                filename=value.filename,
            )
        )
    return uploads


async def parse_submission(form: FormData) -> ClaimSubmission:
    return ClaimSubmission.build(
        email=_text(form, "email"),
        password=_text(form, "password"),
        first_name=_text(form, "firstName"),
        last_name=_text(form, "lastName"),
        business_id=_text(form, "businessId"),
        verification_code=_text(form, "verificationCode"),
        website=_text(form, "website"),
        overrides={field: _text(form, name) for name, field in OVERRIDE_FIELDS.items()},
        assets=await _assets(form),
    )


@router.post("/api/claims", response_model=ClaimResponse, response_model_exclude_none=True)
async def submit_claim(
    request: Request,
    saga: Annotated[ClaimSaga, Depends(get_saga)],
) -> ClaimResponse | JSONResponse:
    """Claim an unclaimed listing and create the claimant's account.

    Expects a multipart form. The tenant comes from the ``Host`` header.
    """

    form = await request.form()
    try:
        submission = await parse_submission(form)
    finally:
        await form.close()

    try:
        outcome = await saga.submit(submission, host=request.headers.get("host"))
    except ClaimError:
        raise
    except Exception:
        log.exception(
            "Unexpected failure claiming listing %s for %s",
            submission.listing_id,
            submission.email,
        )
        return JSONResponse(
            status_code=500,
            content=ClaimResponse.failure(GENERIC_ERROR).model_dump(exclude_none=True),
        )

    return ClaimResponse(
        success=True,
        message="Claim submitted successfully",
        claim_id=outcome.claim_id,
        claimant_id=outcome.claimant_id,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
