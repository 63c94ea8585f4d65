"""
ServiceError → HTTP response mapping.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_TICKER: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.MARKET_DATA_ERROR: 502,
    ErrorKind.API_ERROR: 502,
    ErrorKind.NETWORK_ERROR: 502,
    ErrorKind.NULL_RESPONSE: 502,
}


def status_for(kind: ErrorKind) -> int:
    return _STATUS_BY_KIND.get(kind, 500)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status = status_for(exc.kind)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={"errorCode": exc.kind.value, "detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
