"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from fintrack.domain.exceptions import (
    DomainException,
    InvalidBudgetException,
    InvalidImportFileException,
    InvalidTransactionException,
    NothingToExportException,
    PersistenceException,
    RemoteSyncException,
    RemoteSyncTimeoutException,
    SyncNotConfiguredException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def error_response(status_code: int, exc: DomainException, message: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": message or exc.message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(InvalidTransactionException)
    async def invalid_transaction_handler(
        request: Request,
        exc: InvalidTransactionException,
    ) -> JSONResponse:
        """Handle transaction form validation errors."""
        return error_response(400, exc)

    @app.exception_handler(InvalidBudgetException)
    async def invalid_budget_handler(
        request: Request,
        exc: InvalidBudgetException,
    ) -> JSONResponse:
        """Handle non-positive budget values."""
        return error_response(400, exc)

    @app.exception_handler(InvalidImportFileException)
    async def invalid_import_handler(
        request: Request,
        exc: InvalidImportFileException,
    ) -> JSONResponse:
        """Handle malformed backup files."""
        logger.warning("import_rejected", message=exc.message)
        return error_response(400, exc)

    @app.exception_handler(NothingToExportException)
    async def nothing_to_export_handler(
        request: Request,
        exc: NothingToExportException,
    ) -> JSONResponse:
        """Handle export with an empty list."""
        return error_response(409, exc)

    @app.exception_handler(SyncNotConfiguredException)
    async def sync_not_configured_handler(
        request: Request,
        exc: SyncNotConfiguredException,
    ) -> JSONResponse:
        """Handle sync actions without credentials."""
        return error_response(409, exc)

    @app.exception_handler(RemoteSyncTimeoutException)
    async def remote_timeout_handler(
        request: Request,
        exc: RemoteSyncTimeoutException,
    ) -> JSONResponse:
        """Handle remote document API timeouts."""
        logger.error("remote_sync_timeout")
        return error_response(503, exc, "Remote sync timed out. Please try again.")

    @app.exception_handler(RemoteSyncException)
    async def remote_sync_handler(
        request: Request,
        exc: RemoteSyncException,
    ) -> JSONResponse:
        """Handle remote document API errors."""
        logger.error(
            "remote_sync_error",
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
        )
        return error_response(502, exc)

    @app.exception_handler(PersistenceException)
    async def persistence_handler(
        request: Request,
        exc: PersistenceException,
    ) -> JSONResponse:
        """Handle local storage failures that reached the API."""
        logger.error("persistence_error", key=exc.key, message=exc.message)
        return error_response(503, exc)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
