"""
PC Builder Catalog API — Request Logging Middleware
====================================================

What:  One access-log line per request: method, route, status, duration, id.
Why:   uvicorn's access log has no request id and no timing; this one does,
       and its level follows the status class so 5xx responses stand out.
When:  Runs inside RequestIDMiddleware, so the correlation id is already set.

Log line:
    GET /api/v1/products/categories/{category} 200 12.3ms [a1b2c3d4] category=monitor
    GET /api/v1/products 200 40.8ms [0f3e9a7c] -

The route template is logged instead of the raw path, so every category page
groups under one line shape; the slug or product id follows as key=value.
Unmatched paths (404 from the router) are logged by their raw path.

Health-check paths (/ and /health) are not logged; they are hit every few seconds.
"""

import logging
import time
from typing import Any, Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

from pcbuilder.middleware.request_id import request_id_var

logger = logging.getLogger("pcbuilder.access")


def resolve_route(request: Request) -> Tuple[str, Dict[str, Any]]:
    """Route template and path params for the request, or (raw path, {})."""
    for route in request.app.router.routes:
        match, child_scope = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path), child_scope.get("path_params", {})
    return request.url.path, {}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request after the response is produced.

    Levels:
        5xx → ERROR
        4xx → WARNING
        else → INFO
    """

    SKIPPED_PATHS = {"/", "/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        route, path_params = resolve_route(request)
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        rid = request_id_var.get("")
        params = " ".join(f"{key}={value}" for key, value in path_params.items())
        logger.log(
            level,
            "%s %s %d %.1fms [%s] %s",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            params or "-",
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "path_params": dict(path_params),
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
