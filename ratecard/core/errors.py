from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("ratecard.errors")

FETCH_FAILED_MESSAGE = "Failed to fetch exchange rates"


class RateFetchError(Exception):
    """Upstream rates could not be fetched or parsed.

    The message is meant for display as-is.
    """

    def __init__(self, message: str = FETCH_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class UnsupportedCurrencyError(ValueError):
    pass


class FutureDateError(ValueError):
    pass


def http_error_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": exc.errors(),
        },
    )


def bad_input_handler(request: Request, exc: ValueError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "bad_request", "detail": str(exc)},
    )


def rate_fetch_error_handler(request: Request, exc: RateFetchError):  # type: ignore
    logger.warning("upstream rate fetch failed: %s", exc.message)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "rate_fetch_failed", "detail": exc.message},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
