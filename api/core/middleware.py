"""
Request logging middleware.

Every request gets a correlation id (inbound `X-Request-ID`, or a fresh
UUID4), is timed, and produces exactly one log line once the handler is
done.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return "-"
    return f"{request.client.host}:{request.client.port}"


def _ensure_request_id(request: Request) -> str:
    request_id = request.headers.get(REQUEST_ID_HEADER, "")
    if not request_id:
        request_id = str(uuid.uuid4())
        # Downstream handlers build their own Request from the scope.
        request.scope["headers"] = [
            *request.scope["headers"],
            (REQUEST_ID_HEADER.lower().encode("latin-1"), request_id.encode("latin-1")),
        ]
    request.state.request_id = request_id
    return request_id


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    start = time.perf_counter()
    request_id = _ensure_request_id(request)

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        logger.info(
            "request_id=%s method=%s path=%s status=%s remote=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            status_code,
            _remote_addr(request),
            (time.perf_counter() - start) * 1000.0,
        )


def install(app: FastAPI) -> None:
    app.middleware("http")(log_requests)
