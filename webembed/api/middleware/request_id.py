"""
webembed/api/middleware/request_id.py

Middleware:
- Inyecta/propaga X-Request-ID
- Un log por request: método, path, status, duración y, para /assets, el asset
  servido, si fue 304 y el Content-Encoding elegido.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request, Response

from webembed.api.logging_config import configure_logging
from webembed.api.services import metrics
from webembed.api.settings import Settings


CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]


def _asset_fields(request: Request, response: Response | None, status_code: int) -> dict[str, Any]:
    asset_path = getattr(request.state, "asset_path", None)
    if asset_path is None:
        return {}
    encoding = response.headers.get("content-encoding") if response is not None else None
    return {
        "asset": asset_path,
        "not_modified": status_code == 304,
        "content_encoding": encoding or "identity",
    }


def build_request_id_middleware(settings: Settings) -> Middleware:
    logger = configure_logging(settings)

    async def middleware(request: Request, call_next: CallNext) -> Response:
        start = time.monotonic()
        req_id = (request.headers.get("x-request-id") or "").strip() or uuid.uuid4().hex
        request.state.request_id = req_id

        metrics.inc("http_requests_total", 1)

        response: Response | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = int(response.status_code)
            response.headers["X-Request-ID"] = req_id
            return response
        finally:
            extra: dict[str, Any] = {
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status": status_code,
                "duration_ms": int((time.monotonic() - start) * 1000),
            }
            extra.update(_asset_fields(request, response, status_code))
            logger.info("request", extra=extra)

    return middleware
