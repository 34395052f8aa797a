"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from account_service.domain.account.errors import (
    AccountAlreadyExistsError,
    AccountDomainError,
    AccountNotFoundError,
    InvalidOwnerError,
    RevisionConflictError,
    StoreFailureError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500
HTTP_502 = 502
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(InvalidOwnerError)
    async def handle_invalid_owner(
        _request: Request, exc: InvalidOwnerError
    ) -> JSONResponse:
        """Handle reserved owner names."""
        logger.warning("Invalid owner: %s", exc.owner)
        return _error_response(HTTP_400, "Invalid account owner", exc.message)

    @app.exception_handler(AccountNotFoundError)
    async def handle_account_not_found(
        _request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        """Handle unknown account ids and owners."""
        logger.warning("Account not found: %s", exc.key)
        return _error_response(HTTP_404, "Account not found")

    @app.exception_handler(AccountAlreadyExistsError)
    async def handle_account_exists(
        _request: Request, exc: AccountAlreadyExistsError
    ) -> JSONResponse:
        """Handle duplicate account creation."""
        logger.warning("Account already exists: %s", exc.owner)
        return _error_response(HTTP_409, "Account already exists", exc.message)

    @app.exception_handler(RevisionConflictError)
    async def handle_revision_conflict(
        _request: Request, exc: RevisionConflictError
    ) -> JSONResponse:
        """Handle writes that lost an optimistic-concurrency race twice."""
        logger.warning("Unresolved revision conflict on account %s", exc.account_id)
        return _error_response(HTTP_409, "Account was modified concurrently")

    @app.exception_handler(StoreFailureError)
    async def handle_store_failure(
        _request: Request, exc: StoreFailureError
    ) -> JSONResponse:
        """Handle account store outages."""
        logger.error("Account store failure during %s: %s", exc.operation, exc.reason)
        return _error_response(HTTP_503, "Account store unavailable")

    @app.exception_handler(UpstreamUnavailableError)
    async def handle_upstream_unavailable(
        _request: Request, exc: UpstreamUnavailableError
    ) -> JSONResponse:
        """Handle an upstream failure that escaped its fallback."""
        logger.error("Upstream service unavailable: %s", exc.service)
        return _error_response(HTTP_502, "Upstream service unavailable")

    @app.exception_handler(AccountDomainError)
    async def handle_account_domain(
        _request: Request, exc: AccountDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled account domain errors."""
        logger.error("Unhandled account domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
