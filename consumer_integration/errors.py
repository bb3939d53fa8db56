import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from consumer_integration.config import settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR_REASON = "Internal server error"
AUTH_ERROR_REASON = "Invalid or missing token"


class ConsumerIntegrationError(Exception):
    """Base error carrying the partner response shape."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, reason: str, extra: Optional[dict[str, Any]] = None):
        super().__init__(reason)
        self.reason = reason
        self.extra = extra or {}

    def to_body(self) -> dict[str, Any]:
        return {**self.extra, "statusCode": self.status_code, "reasonPhrase": self.reason}


class ValidationError(ConsumerIntegrationError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ConsumerIntegrationError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthError(ConsumerIntegrationError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__(AUTH_ERROR_REASON)


class StorageError(ConsumerIntegrationError):
    """The database is unreachable or a write failed. Safe for the caller to retry."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_body(self) -> dict[str, Any]:
        # the driver message only leaks outside production in development mode
        reason = self.reason if settings.is_development else INTERNAL_ERROR_REASON
        return {**self.extra, "statusCode": self.status_code, "reasonPhrase": reason}


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ConsumerIntegrationError)
    async def handle_consumer_error(request: Request, exc: ConsumerIntegrationError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"statusCode": status.HTTP_400_BAD_REQUEST, "reasonPhrase": "Malformed request body"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Unhandled storage error on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=StorageError(str(exc)).to_body(),
        )
