"""
Domain errors raised by services and their HTTP translation.

Services never build HTTP responses themselves: they raise one of the
errors below and the handlers registered in `register_exception_handlers`
map it to a status code. Existence failures are always NotFoundError (404),
entitlement and availability failures are always ForbiddenError (403).
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    """Base domain error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No result for this search!"


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "The booking was not allowed!"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info(
        "domain_error",
        error=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
