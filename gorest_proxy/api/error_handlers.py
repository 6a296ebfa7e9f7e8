"""Error Handlers — global exception handlers for failures outside a route body.

Invariants:
    - RequestValidationError (unparseable body, wrong field types) → 400 with field details
    - GoRestProxyError client faults (4xx) → from_client_fault with their own status
    - Everything else → from_unexpected (500)

Design Decisions:
    - Route bodies already normalize their own faults (normalize_faults); these
      handlers cover dependency resolution and request parsing
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from gorest_proxy.api.error_normalizer import from_client_fault, from_unexpected
from gorest_proxy.core.errors import GoRestProxyError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_proxy_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_proxy_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GoRestProxyError)
    async def proxy_error_handler(request: Request, exc: GoRestProxyError):
        if exc.http_status < 500:
            logger.warning(
                f"GoRestProxyError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
            return from_client_fault(exc.message, exc.http_status)
        return from_unexpected(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return from_client_fault(
            "Invalid request data",
            status.HTTP_400_BAD_REQUEST,
            _validation_details(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all."""
        return from_unexpected(exc)


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            # drop the leading "body"/"path" location segment
            "field": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
