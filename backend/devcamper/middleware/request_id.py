"""
DevCamper Backend — Request ID Middleware
===========================================

What:  Tags each request with a short ID and echoes it in X-Request-ID.
Why:   Lets an access log line, an error log entry and a client report be
       matched to the same request.
How:   Reuses the client's X-Request-ID when it is a plain token (letters,
       digits, ".", "_", "-", at most 64 chars), otherwise generates one;
       stores it in a ContextVar read by the access logger and error handlers.

A client-supplied ID ends up in log lines and response headers, so anything
that could break a log line or smuggle markup in is replaced, not escaped.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]+")

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """The client's ID when it is a safe token, a fresh 8-char ID otherwise."""
    if (
        supplied
        and len(supplied) <= MAX_REQUEST_ID_LENGTH
        and _REQUEST_ID_PATTERN.fullmatch(supplied)
    ):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID and returns it in the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
