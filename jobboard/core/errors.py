"""
Error taxonomy and the single error -> response mapping.

Every failure a route or service raises is one of the JobBoardError
subclasses below. The handlers installed by register_exception_handlers()
turn them (and framework errors) into the standard envelope:

    {"status": "error", "message": "...", "errors": [...]}
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JobBoardError(Exception):
    """
    Base class for every expected API failure.

    Attributes:
        status_code (int): HTTP status returned to the client
        message (str): human readable message
        details (Optional[List[Dict[str, Any]]]): field-level problems
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationFailed(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(JobBoardError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(JobBoardError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(JobBoardError):
    """Duplicate email, tax id, skill name or application."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotImplementedFeature(JobBoardError):
    status_code = status.HTTP_501_NOT_IMPLEMENTED


def error_body(message: str, errors: Optional[List[Dict[str, Any]]] = None, **extra) -> dict:
    body = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body


async def handle_jobboard_error(request: Request, exc: JobBoardError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.details),
        headers=headers,
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        # drop the "body"/"query" prefix, keep the field path
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", errors),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    reference = uuid.uuid4().hex
    logger.exception("Unhandled error on %s %s (ref=%s)", request.method, request.url.path, reference)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", reference=reference),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error -> envelope mapping on the application."""
    app.add_exception_handler(JobBoardError, handle_jobboard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
