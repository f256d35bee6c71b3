"""
Request Context Middleware.

Tags every request with an ID and the calling front end, binds both to the
structlog context and reports the response time.

Headers:
    X-Request-ID     - propagated, or generated when absent
    X-Frontend-ID    - web, cli, tui, api, internal (anything else is "unknown")
    X-Response-Time  - duration in milliseconds, added to every response
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from notesapp.backend.core.logging import get_logger
from notesapp.backend.core.utils import elapsed_ms, utc_now

logger = get_logger(__name__)

# Keep aligned with VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "cli", "tui", "api", "internal"}


def resolve_frontend(header_value: str | None) -> str:
    """Normalize an X-Frontend-ID header to a known frontend name."""
    frontend = (header_value or "unknown").strip().lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Adds request context to every request.

    The request ID, frontend and start time are stored on request.state so
    handlers (and the exception handlers) can read them. When request logging
    is enabled, completed requests are logged at info level instead of debug.
    """

    def __init__(self, app: ASGIApp, log_requests: bool = False) -> None:
        super().__init__(app)
        self.log_requests = log_requests

    def _log(self, message: str, **fields: object) -> None:
        if self.log_requests:
            logger.info(message, extra=fields)
        else:
            logger.debug(message, extra=fields)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = resolve_frontend(request.headers.get("X-Frontend-ID"))
        start_time = utc_now()

        request.state.request_id = request_id
        request.state.frontend = frontend
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = elapsed_ms(start_time)
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": duration_ms, "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = elapsed_ms(start_time)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            self._log(
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
