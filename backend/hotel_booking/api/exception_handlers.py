"""
Translate exceptions into HTTP responses at the API boundary.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_booking.core.config import get_settings
from hotel_booking.core.errors import BookingError
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.info(
        "booking_error",
        kind=exc.kind.value,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid", errors=str(exc.errors()))
    return JSONResponse(
        status_code=get_settings().INVALID_BODY_STATUS,
        content={"detail": "Invalid request"},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error", error=str(exc))
    return JSONResponse(
        status_code=get_settings().UNEXPECTED_ERROR_STATUS,
        content={"detail": "Request denied"},
    )


EXCEPTION_HANDLERS = {
    BookingError: booking_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unexpected_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
