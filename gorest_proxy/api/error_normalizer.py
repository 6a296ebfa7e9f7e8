"""Error Normalizer — every failure leaves the API as one of two response shapes.

Invariants:
    - from_client_fault: explicitly detected bad input / not found → given status
    - from_unexpected: anything else → 500 with the fault's message; always logged
      with the fault's kind
    - normalize_faults: no exception escapes a decorated route
    - Both shapes use the GoRestProxyError.to_response() envelope

Design Decisions:
    - Decorator keeps the route signature (functools.wraps) so FastAPI still
      resolves path params, bodies and Depends()
"""

import functools
import logging
from typing import Any, Awaitable, Callable

from fastapi import status
from fastapi.responses import JSONResponse

from gorest_proxy.core.errors import (
    ClientInputError, ErrorCategory, ErrorSeverity, GoRestProxyError,
    ResourceNotFoundError,
)
from gorest_proxy.core.outcomes import ClientFault, NotFound

logger = logging.getLogger(__name__)

_CLIENT_FAULTS: dict[int, type[GoRestProxyError]] = {
    status.HTTP_400_BAD_REQUEST: ClientInputError,
    status.HTTP_404_NOT_FOUND: ResourceNotFoundError,
}


def from_client_fault(
    message: str, status_code: int, details: list[dict] | None = None,
) -> JSONResponse:
    fault = _CLIENT_FAULTS.get(status_code, ClientInputError)(message)
    content = fault.to_response(details)
    content["error"]["status"] = status_code
    return JSONResponse(status_code=status_code, content=content)


def from_outcome(outcome: NotFound | ClientFault) -> JSONResponse:
    details = outcome.details if isinstance(outcome, ClientFault) else None
    return from_client_fault(outcome.message, outcome.status_code, details)


def from_unexpected(fault: BaseException) -> JSONResponse:
    kind = type(fault).__name__
    if isinstance(fault, GoRestProxyError):
        normalized = fault
    else:
        normalized = GoRestProxyError(
            str(fault) or kind, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        )
    logger.error(
        f"Unexpected {kind}: {normalized.message}",
        extra={"error_kind": kind, "error_code": normalized.code},
        exc_info=fault,
    )
    content = normalized.to_response()
    content["error"]["status"] = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
    )


def normalize_faults(
    handler: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Any]]:
    """Route decorator: unexpected exceptions become from_unexpected responses."""

    @functools.wraps(handler)
    async def wrapper(*args, **kwargs):
        try:
            return await handler(*args, **kwargs)
        except Exception as e:
            return from_unexpected(e)

    return wrapper
