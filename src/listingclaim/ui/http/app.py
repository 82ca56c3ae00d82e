"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from listingclaim.adapters.sqlalchemy.unit_of_work import shutdown
from listingclaim.app import build_claim_saga
from listingclaim.domain.errors import ClaimError

from .routes import router
from .schemas import ClaimResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from listingclaim.domain.claiming import ClaimSaga

log = getLogger(__name__)


async def claim_error_handler(request: Request, exc: ClaimError) -> JSONResponse:
    log.warning(
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc,
    )
    body = ClaimResponse.failure(exc.public_message).model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=body)


def create_app(saga: ClaimSaga | None = None) -> FastAPI:
    """Build the HTTP app.

    Without an explicit ``saga`` one is assembled from the environment when the
    app starts and the database engine is disposed when it stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "saga", None) is not None:
            yield
            return
        app.state.saga = await build_claim_saga()
        try:
            yield
        finally:
            await shutdown()

    app = FastAPI(title="Listing claims", lifespan=lifespan)
    if saga is not None:
        app.state.saga = saga
    app.add_exception_handler(ClaimError, claim_error_handler)
    app.include_router(router)
    return app
