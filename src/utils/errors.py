"""Response envelope for failures and the app-wide exception handlers.

Every failure body has the shape::

    {"success": False, "message": ..., "errors": [...], "data": None}

``errors`` is only present for request validation failures.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from src.utils.validation import FieldError, Invalid

logger = logging.getLogger(__name__)


def bad_request(invalid: Invalid) -> JSONResponse:
    logger.debug("Rejected request parameters: %s", ", ".join(invalid.fields))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation error",
            "errors": [error.model_dump() for error in invalid.errors],
            "data": None
        }
    )


def format_validation_errors(errors) -> Invalid:
    formatted = []
    for err in errors:
        # Skip the first element if it's "body", "query", etc.
        loc = err["loc"]
        field = ".".join(str(l) for l in loc[1:]) if len(loc) > 1 else str(loc[0])
        formatted.append(FieldError(field=field, message=err["msg"]))
    return Invalid(errors=formatted)


async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.detail,
            "data": None
        }
    )


async def custom_validation_exception_handler(request: Request, exc: RequestValidationError):
    # Query parameters FastAPI could not coerce (page=abc, missing from) are client faults too
    return bad_request(format_validation_errors(exc.errors()))


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "success": False,
            "message": f"Rate limit exceeded: {exc.detail}",
            "data": None
        }
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database failure while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "internal server error",
            "data": None
        }
    )
