"""
FastAPI exception handlers for the domain error taxonomy.

The service layer raises BankingError subclasses that know their ErrorKind
but nothing about HTTP. This module is the one place where a kind becomes a
status code, so every endpoint reports failures the same way:

    VALIDATION   -> 400 Bad Request
    NOT_FOUND    -> 404 Not Found
    UNAUTHORIZED -> 403 Forbidden (401 for bad login credentials)
    CONFLICT     -> 409 Conflict
    STORAGE      -> 500 Internal Server Error

Response body: {"detail": "<message>", "error_type": "<kind>"}
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from banking.exceptions import (
    BankingError,
    ErrorKind,
    InsufficientFundsError,
    InvalidCredentialsError,
    StorageError,
)

logger = structlog.get_logger()


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 500,
}


def status_for(exc: BankingError) -> int:
    """Return the HTTP status code for a domain error."""
    return STATUS_BY_KIND[exc.kind]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the base
    BankingError handler covers every kind; the more specific handlers
    below only add fields or adjust the status code.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(BankingError)
    async def banking_error_handler(
        request: Request, exc: BankingError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_for(exc),
            content={"detail": exc.detail, "error_type": exc.kind.value},
        )

    @app.exception_handler(InsufficientFundsError)
    async def insufficient_funds_handler(
        request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_for(exc),
            content={
                "detail": exc.detail,
                "error_type": exc.kind.value,
                "requested_cents": exc.requested_cents,
                "available_cents": exc.available_cents,
            },
        )

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(
        request: Request, exc: InvalidCredentialsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail, "error_type": exc.kind.value},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.error("storage_error_response", path=request.url.path, detail=exc.detail)
        return JSONResponse(
            status_code=status_for(exc),
            content={"detail": exc.detail, "error_type": exc.kind.value},
        )
