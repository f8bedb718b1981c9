"""Error Handlers — global exception handlers for the ChoreHub API.

Invariants:
    - ChoreHubError -> structured JSON with error code, message, severity
    - RequestValidationError -> 400 with field-level error details
    - Exception (catch-all) -> 500 that never leaks internal details
    - 401 and 403 (pin failures) carry no household context, in the body or
      in the log line, which names the route template instead of the path

Design Decisions:
    - Three-layer handler: domain (ChoreHubError), validation (Pydantic), catch-all
    - Pin failures log at info; other client errors at warning, infrastructure
      errors at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chorehub.core.errors import ChoreHubError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_PIN_FAILURES = frozenset({ErrorCategory.UNAUTHORIZED, ErrorCategory.FORBIDDEN})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ChoreHubError)
    async def chorehub_error_handler(request: Request, exc: ChoreHubError):
        """Handle all ChoreHub domain/infrastructure errors."""
        if exc.category in _PIN_FAILURES:
            # The concrete path would name the household being tried.
            logger.info(
                f"Pin check failed: {exc.code}",
                extra={"error_code": exc.code, "path": _route_template(request)},
            )
            return JSONResponse(
                status_code=exc.http_status, content=_without_context(exc.to_response()),
            )

        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        extra = {"error_code": exc.code, "path": request.url.path}
        if exc.context.household_id:
            extra["household_id"] = exc.context.household_id
        if exc.context.stream_key:
            extra["stream_key"] = exc.context.stream_key
        logger.log(level, f"ChoreHubError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _without_context(body: dict) -> dict:
    body["error"].pop("context", None)
    return body


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
