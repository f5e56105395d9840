"""
Maps domain errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shortlink_app.exceptions import ErrorKind, ShortlinkError
from shortlink_app.schemas.url import ErrorResponse

logger = logging.getLogger(__name__)


STATUS_BY_KIND = {
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_DESTINATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ALIAS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RESERVED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALLOCATION_EXHAUSTED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# OpenAPI documentation of the error body for routers that raise ShortlinkError
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in sorted(set(STATUS_BY_KIND.values()))
}


async def shortlink_error_handler(request: Request, exc: ShortlinkError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"kind": exc.kind.value, "detail": exc.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortlinkError, shortlink_error_handler)
