"""
PC Builder Catalog API — Request ID Middleware
===============================================

What:  Gives every request a short correlation id and echoes it back.
Why:   Error bodies carry `request_id`; support can grep the server log for it.
How:   Reuses an incoming X-Request-ID when it looks like an id (the storefront
       may send one), otherwise makes an 8-character id. The id is stored in a
       ContextVar for loggers and exception handlers and set on the response.

An incoming value is only trusted if it is 1-64 characters of letters, digits,
'-' or '_'; anything else (spaces, newlines, very long strings) would end up
verbatim in access-log lines.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"
_VALID_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def choose_request_id(incoming: Optional[str]) -> str:
    if incoming and _VALID_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns `request.state.request_id` and the `X-Request-ID` response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
