"""
GATE ERROR HANDLING
===================
Turns gate wiring and dispatch failures into masked 500 responses.

FLOW:
- CustomerAreaGateMiddleware catches GateError around evaluate/dispatch and
  answers with gate_error_response(); the request never reaches the guarded
  page.
- register_error_handlers() installs the same response for GateError raised
  inside routes (for example a gate built lazily by a route dependency).

HOW:
- The log line names the error class, the path and the session's role.
- The response body never carries the error message.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from gatekeeper.errors import GateConfigurationError, GateError
from gatekeeper.gate_logging import get_logger

GATE_ERROR_BODY = {"detail": "An error occurred"}


def _error_kind(exc: GateError) -> str:
    if isinstance(exc, GateConfigurationError):
        return "configuration"
    return "dispatch"


def gate_error_response(request: Request, exc: GateError, role: str = "anonymous") -> JSONResponse:
    get_logger().error(
        "gate_error=%s kind=%s role=%s path=%s",
        exc.__class__.__name__,
        _error_kind(exc),
        role,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(GATE_ERROR_BODY, status_code=500)


def register_error_handlers(app) -> None:
    @app.exception_handler(GateError)
    async def gate_exception_handler(request: Request, exc: GateError):
        return gate_error_response(request, exc)
