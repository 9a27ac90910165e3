from __future__ import annotations
import json
import logging
import time
from typing import Any, Callable
from starlette.requests import Request
from starlette.responses import Response

# request.state attributes copied into the log line when a route sets them
STATE_FIELDS = ("submission_kind", "estimated_cost", "urgent")

logger = logging.getLogger(__name__)


def json_logger_middleware() -> Callable:
    """Return a Starlette middleware callable that logs a JSON line per request.

    Lines go to the ``app.logging`` logger at INFO.

    It captures: method, path, status, latency_ms, and any selected attributes
    from request.state (submission_kind, estimated_cost, urgent).
    """

    async def _middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
        start = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
        finally:
            latency_ms = round((time.perf_counter() - start) * 1000.0, 2)
            s = getattr(request, "state", None)
            payload = {
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "latency_ms": latency_ms,
            }
            for k in STATE_FIELDS:
                if s is not None and hasattr(s, k):
                    payload[k] = getattr(s, k)
            logger.info(json.dumps(payload, default=str))
        return response

    return _middleware
