# src/eloboard/middleware/logging.py

"""Request/response logging middleware for the EloBoard API."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("eloboard.api")

REQUEST_ID_HEADER = "X-Request-ID"


def _team_from_path(path: str) -> str | None:
    # /teams/{team_id}/... routes carry the team in the URL
    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "teams":
        return parts[1]
    return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with a short id, its outcome and its duration.

    The id is exposed to handlers as ``request.state.request_id`` and echoed
    back in the X-Request-ID response header. Command bodies are not logged;
    they carry user text.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "team_id": _team_from_path(request.url.path),
            "client_ip": request.client.host if request.client else "unknown",
        }
        started = time.perf_counter()

        logger.info(
            "[%s] %s %s", request_id, request.method, request.url.path, extra=context
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "[%s] %s %s -> ERROR (%.2fms): %s",
                request_id,
                request.method,
                request.url.path,
                duration_ms,
                e,
                extra={**context, "duration_ms": round(duration_ms, 2)},
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "[%s] %s %s -> %d (%.2fms)",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response  # type: ignore[no-any-return]
