"""서비스 예외 -> HTTP 응답 매핑."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions import (
    FailedPreconditionError,
    FeedServiceError,
    NotFoundError,
    TransientStorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[FeedServiceError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    FailedPreconditionError: 409,
    TransientStorageError: 503,
}


async def feed_service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, FeedServiceError)

    status = 500
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status = code
            break

    if status >= 500:
        logger.warning("request %s %s failed: %s", request.method, request.url.path, exc)

    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "retryable": exc.retryable},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FeedServiceError, feed_service_error_handler)
