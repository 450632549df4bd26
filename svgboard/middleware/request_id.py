"""
SVGboard Backend — Request ID Middleware
==========================================

Correlates log lines and error bodies with one HTTP request. The ID is
returned in the X-Request-ID response header and copied into every error
body's `request_id` field.

A client-supplied X-Request-ID is reused only if it is short and made of
safe characters; anything else is replaced with a generated ID so it can
never break a log line.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: str | None) -> str:
    """Client ID if acceptable, otherwise a fresh 8-character hex ID."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the unhandled-exception handler runs outside
        # this middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
