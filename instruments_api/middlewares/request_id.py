from __future__ import annotations

import logging
import time
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
logger = logging.getLogger("instruments_api.request")


def describe_request(request: Request, status_code: int, duration_ms: float) -> dict[str, Any]:
    """Fields of the ``request.completed`` log line.

    ``route`` is the matched path template (``/instruments/{instrument_id}``)
    so log queries can group per endpoint; the raw identifier, as sent, goes
    in ``instrument_id``.
    """

    route = request.scope.get("route")
    fields: dict[str, Any] = {
        "method": request.method,
        "route": getattr(route, "path", request.url.path),
        "status": status_code,
        "duration_ms": round(duration_ms, 2),
    }
    instrument_id = request.scope.get("path_params", {}).get("instrument_id")
    if instrument_id is not None:
        fields["instrument_id"] = instrument_id
    return fields


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ``X-Request-ID`` and log one line per request."""

    header_name = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(self.header_name) or uuid4().hex
        token = request_id_ctx_var.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            response.headers[self.header_name] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
            logger.info(
                "request.completed",
                extra={"extra_data": describe_request(request, response.status_code, duration_ms)},
            )
            return response
        finally:
            request_id_ctx_var.reset(token)
