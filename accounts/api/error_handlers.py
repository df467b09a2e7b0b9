"""
Global exception handlers.

Every failure leaves the service as {"status": "error", "message": ...}:
    - HttpError → its own status and message
    - AppError → mapped through HttpError.from_app_error
    - RequestValidationError → 400 listing the parse errors
    - Exception (catch-all) → 500, never leaks internal details
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accounts.core.errors import AppError, ErrorCategory, ErrorMessage, HttpError
from accounts.core.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(HttpError)
    async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} -> {exc}")
        return exc.to_response()

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.category is ErrorCategory.INTERNAL:
            logger.error(
                f"Internal error on {request.url.path}: {exc.kind.name}",
                exc_info=exc,
            )
        else:
            logger.warning(f"{exc.kind.name} on {request.url.path}")
        settings = request.app.state.settings
        return HttpError.from_app_error(
            exc, permission_denied_status=settings.PERMISSION_DENIED_STATUS
        ).to_response()

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(f"Malformed request on {request.url.path}: {len(exc.errors())} error(s)")
        return HttpError.bad_request(_describe(exc)).to_response()

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all: never leaks internal details."""
        logger.error(f"Unhandled exception on {request.url.path}: {type(exc).__name__}", exc_info=True)
        return HttpError.server_error(ErrorMessage.SERVER_ERROR).to_response()


def _describe(exc: RequestValidationError) -> str:
    """One line per parse error: ``field: message``."""
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else str(error["msg"]))
    return ", ".join(parts) or "Invalid request"
