"""Response envelope and error mapping."""
import logging
from typing import Generic, Optional, TypeVar
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from marketplace.core.errors import MarketplaceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every response body."""

    success: bool
    message: Optional[str] = None
    data: Optional[T] = None
    error: Optional[str] = None


def error_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    """Build a failure envelope."""
    body = ApiResponse(success=False, message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    """Map service errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(
            f"[API] {request.method} {request.url.path} failed - "
            f"{type(exc).__name__}: {exc.message}",
            exc_info=exc,
        )
        return error_response(exc.status_code, "Server error", error=exc.message)

    logger.info(
        f"[API] {request.method} {request.url.path} rejected - "
        f"{type(exc).__name__}: {exc.message}"
    )
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map malformed request bodies to 400."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.info(f"[API] {request.method} {request.url.path} malformed - {details}")
    return error_response(400, "Invalid request", error=details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 envelope."""
    logger.error(
        f"[API] {request.method} {request.url.path} crashed - {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return error_response(500, "Internal server error", error=type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope error handlers on an application."""
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
