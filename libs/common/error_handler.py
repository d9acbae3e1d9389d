"""Global exception handlers for consistent error responses.

Usage:
    from libs.common.error_handler import add_exception_handlers

    app = FastAPI()
    add_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from libs.common.errors import GymError
from libs.common.logging import get_logger, get_request_id

logger = get_logger(__name__)


async def gym_error_handler(request: Request, exc: GymError) -> JSONResponse:
    """Render a domain failure as ``{"detail", "code"}``."""
    logger.info(
        "Domain check failed",
        extra={"extra_fields": {"code": exc.code, "error": exc.message}},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"extra_fields": {"error": str(exc)}},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "code": "internal_error",
            "request_id": get_request_id(),
        },
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GymError, gym_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
