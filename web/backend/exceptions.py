#!/usr/bin/env python3
"""
Error handlers for the web application.

Core exceptions are mapped to HTTP status codes in one place so every
endpoint reports failures with the same body:
{"success": false, "error": ..., "type": ...}.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    NotFoundError,
    InvalidStateError,
    UnauthorizedError,
    ValidationError,
    StorageIOError
)

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (UnauthorizedError, 403),
    (ValidationError, 400),
    (StorageIOError, 503),
)


def status_code_for(exc: ServiceException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def _error_body(error, error_type: str) -> dict:
    return {"success": False, "error": error, "type": error_type}


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle core exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    response = JSONResponse(
        status_code=status_code,
        content=_error_body(str(exc), exc.__class__.__name__)
    )
    if isinstance(exc, StorageIOError):
        response.headers["Retry-After"] = "5"
    return response


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTPException")
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies get the same 400 as core validation errors."""
    return JSONResponse(
        status_code=400,
        content=_error_body(
            [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()],
            "ValidationError"
        )
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", "InternalError")
    )
