"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lessico import __version__
from lessico.api.routers import vocabulary
from lessico.api.schema import validation_issues
from lessico.config import ConfigurationError
from lessico.domain.importing import (
    DependencyMissingError,
    EntryValidationError,
    StorageError,
    ValidationIssue,
)

log = logging.getLogger(__name__)


def _validation_failed(issues: list[ValidationIssue]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation failed",
            "details": [{"field": issue.field, "message": issue.message} for issue in issues],
        },
    )


async def _entry_validation_handler(_request: Request, exc: EntryValidationError) -> JSONResponse:
    log.warning("Rejected import with %s validation issues", len(exc.issues))
    return _validation_failed(list(exc.issues))


async def _request_validation_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return _validation_failed(validation_issues(list(exc.errors())))


async def _dependency_missing_handler(
    _request: Request,
    exc: DependencyMissingError,
) -> JSONResponse:
    log.warning("Rejected conjugation import: %s missing verbs", len(exc.missing_keys))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Some verbs do not exist in the database",
            "missingVerbs": list(exc.missing_keys),
        },
    )


async def _storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
    log.error(
        "Storage failure after created=%s, updated=%s",
        exc.created,
        exc.updated,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "created": exc.created,
            "updated": exc.updated,
        },
    )


async def _configuration_error_handler(
    _request: Request,
    exc: ConfigurationError,
) -> JSONResponse:
    log.error("Server configuration error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def _http_error_handler(
    _request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


def create_app() -> FastAPI:
    """Build the admin API with its error translation layer."""

    app = FastAPI(title="Lessico", version=__version__)

    app.add_exception_handler(EntryValidationError, _entry_validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(DependencyMissingError, _dependency_missing_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(vocabulary.router)
    return app
