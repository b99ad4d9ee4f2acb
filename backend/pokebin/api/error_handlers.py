"""Error Handlers — global exception handlers for the Pokebin API.

Invariants:
    - PokebinError → structured JSON with error code, message, severity
    - RequestValidationError → 400 in the same envelope, plus field-level details
    - Exception (catch-all) → 500 in the same envelope, never leaks internal details
    - Every handler logs the paste id when the route carries one

Design Decisions:
    - Validation and catch-all responses are built from PokebinError, so clients
      parse one envelope shape (timestamp + context included)
    - Client errors (4xx) logged at WARNING, server errors at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from pokebin.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, PokebinError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_pokebin_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _route_paste_id(request: Request) -> int | None:
    """Paste id from the path, when the route has one and it is numeric."""
    raw = request.path_params.get("paste_id")
    return int(raw) if isinstance(raw, str) and raw.isdigit() else None


def _log_extra(request: Request, exc: PokebinError) -> dict:
    return {
        "error_code": exc.code,
        "method": request.method,
        "path": request.url.path,
        "paste_id": exc.context.paste_id,
    }


def _register_pokebin_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PokebinError)
    async def pokebin_error_handler(request: Request, exc: PokebinError):
        """Handle all Pokebin domain/infrastructure errors."""
        if exc.context.paste_id is None:
            exc.context.paste_id = _route_paste_id(request)
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        logger.log(
            level, f"PokebinError: {exc.message}",
            extra=_log_extra(request, exc),
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = _validation_details(exc)
        error = PokebinError(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            context=ErrorContext(
                paste_id=_route_paste_id(request),
                field_name=details[0]["field"] if details else None,
            ),
            http_status=status.HTTP_400_BAD_REQUEST,
        )
        logger.warning(
            f"Rejected request: {', '.join(d['field'] for d in details)}",
            extra=_log_extra(request, error),
        )
        body = error.to_response()
        body["error"]["details"] = details
        return JSONResponse(status_code=error.http_status, content=body)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        error = PokebinError(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
            ErrorContext(paste_id=_route_paste_id(request)),
        )
        logger.error(
            f"Unhandled {type(exc).__name__}: {exc}",
            exc_info=True,
            extra=_log_extra(request, error),
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
