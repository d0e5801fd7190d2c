"""
Exception handlers for dyncrud applications.

Routes raise the runtime's domain errors; these handlers turn them into
JSON responses:
- NoSuchModelError: 400
- ValidationFailedError / SchemaCompileError: 400 with the error list
- RecordNotFoundError: 404
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dyncrud.runtime.errors import (
    NoSuchModelError,
    RecordNotFoundError,
    SchemaCompileError,
    ValidationFailedError,
)
from dyncrud.runtime.logging import get_logger, log_with_context
from dyncrud.runtime.models import ErrorResponse


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the runtime's exception handlers on a FastAPI application.

    Args:
        app: FastAPI application instance
    """
    logger = get_logger("API")

    @app.exception_handler(NoSuchModelError)
    async def no_such_model_handler(request: Request, exc: NoSuchModelError) -> JSONResponse:
        """Writes against an unregistered model are client errors."""
        log_with_context(logger, logging.INFO, exc.message, model=exc.model_name)
        return _error_response(
            400, ErrorResponse(message=exc.message, type="no_such_model")
        )

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(
        request: Request, exc: ValidationFailedError
    ) -> JSONResponse:
        """Payload (or schema) validation failures, with every error listed."""
        error_type = (
            "schema_error" if isinstance(exc, SchemaCompileError) else "validation_error"
        )
        return _error_response(
            400,
            ErrorResponse(message=exc.message, type=error_type, errors=exc.errors),
        )

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        """Convert missing records to 404 Not Found."""
        log_with_context(
            logger, logging.DEBUG, exc.message, model=exc.model_name, id=exc.record_id
        )
        return _error_response(404, ErrorResponse(message=exc.message, type="not_found"))
