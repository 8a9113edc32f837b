from __future__ import annotations

import logging

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects mutation bodies larger than ``max_bytes`` before they reach a handler."""

    def __init__(self, app, *, max_bytes: int) -> None:
        super().__init__(app)
        self._max_bytes = max(1, max_bytes)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
            return await call_next(request)

        raw_length = request.headers.get("content-length")
        if not raw_length:
            return await call_next(request)
        try:
            length = int(raw_length)
        except ValueError:
            length = 0
        if length > self._max_bytes:
            logger.warning("Rejected %s %s: body of %d bytes", request.method, request.url.path, length)
            return JSONResponse(
                status_code=413,
                content={
                    "message": f"Request body too large ({length} bytes). Maximum allowed is {self._max_bytes} bytes.",
                    "details": {"max_bytes": self._max_bytes},
                },
            )
        return await call_next(request)
