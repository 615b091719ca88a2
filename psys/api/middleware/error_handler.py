"""
Exception handlers mapping engine errors onto the JSON error envelope

Every error body has the same shape:
    {"success": false, "error": ..., "error_type": ..., "details": {...}}
"""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from psys.utils.config import settings
from psys.utils.exceptions import CapabilityError, PSYSException
from psys.utils.logger import get_logger

logger = get_logger(__name__)


def error_response(
    status_code: int,
    error: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "error_type": error_type,
            "details": details or {}
        }
    )


async def psys_exception_handler(request: Request, exc: PSYSException):
    """Engine errors; a failing capability is an upstream fault and logged as such"""
    extra = {"status_code": exc.status_code, "details": exc.details, "path": request.url.path}
    if isinstance(exc, CapabilityError):
        logger.error(f"Capability '{exc.details.get('capability')}' failed: {exc.message}", extra=extra)
    else:
        logger.warning(f"{exc.__class__.__name__}: {exc.message}", extra=extra)

    return error_response(exc.status_code, exc.message, exc.__class__.__name__, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body did not match the schema (e.g. a trait list without five scores)"""
    errors = jsonable_encoder(exc.errors())
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
    logger.warning(f"Validation error on {', '.join(fields) or 'body'}", extra={
        "path": request.url.path,
        "fields": fields
    })

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        "ValidationError",
        {"errors": errors}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing and method errors"""
    logger.warning(f"HTTP {exc.status_code}: {exc.detail}", extra={"path": request.url.path})
    return error_response(exc.status_code, str(exc.detail), "HTTPException")


async def generic_exception_handler(request: Request, exc: Exception):
    """Anything unexpected; the message is only exposed in debug mode"""
    logger.error(f"Unexpected exception: {exc}", exc_info=True, extra={"path": request.url.path})

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "InternalServerError",
        {"message": str(exc)} if settings.DEBUG else None
    )
