"""
DevCamper Backend — Logging Setup & Access Logging Middleware
===============================================================

What:  Root logger configuration plus one access line per HTTP request.
Why:   A single readable line per request (method, URL, status, latency,
       size) is what you scan first when something misbehaves.
How:   setup_logging() configures the root logger once at startup.
       RequestLoggingMiddleware times each request and logs on completion.

Access line format:
    GET /api/v1/bootcamps?page=2 200 3.4ms - 45b [a1b2c3d4]

Colors:
    With LOG_COLOR on, rich's RichHandler renders the console output and
    HttpAccessHighlighter colors methods and status classes:
    GET green, POST yellow, PUT blue, DELETE red, PATCH magenta;
    5xx red, 4xx yellow, 3xx cyan, 2xx green.
"""

import logging
import sys
import time

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.theme import Theme
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from devcamper.config import settings
from devcamper.middleware.error_handler import error_response
from devcamper.middleware.request_id import request_id_var

logger = logging.getLogger("devcamper.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

ACCESS_THEME = Theme(
    {
        "http.get": "bold green",
        "http.post": "bold yellow",
        "http.put": "bold blue",
        "http.delete": "bold red",
        "http.patch": "bold magenta",
        "http.other": "bold cyan",
        "http.status_5xx": "red",
        "http.status_4xx": "yellow",
        "http.status_3xx": "cyan",
        "http.status_2xx": "green",
        "http.timing": "bright_black",
    }
)


class HttpAccessHighlighter(RegexHighlighter):
    """Highlights HTTP methods, status codes and timings in log messages."""

    base_style = "http."
    highlights = [
        r": (?P<get>GET)\b",
        r": (?P<post>POST)\b",
        r": (?P<put>PUT)\b",
        r": (?P<delete>DELETE)\b",
        r": (?P<patch>PATCH)\b",
        r": (?P<other>HEAD|OPTIONS)\b",
        r" (?P<status_5xx>5\d\d) ",
        r" (?P<status_4xx>4\d\d) ",
        r" (?P<status_3xx>3\d\d) ",
        r" (?P<status_2xx>2\d\d) ",
        r"(?P<timing>\d+\.\dms - \d+b)",
    ]


def setup_logging() -> None:
    """
    Configure console logging for the whole process.

    Called once by the server lifespan and by the seeder CLI before any
    other initialization.
    """
    if settings.log_color:
        handler: logging.Handler = RichHandler(
            console=Console(theme=ACCESS_THEME, stderr=False),
            highlighter=HttpAccessHighlighter(),
            rich_tracebacks=True,
            show_path=False,
            log_time_format=DATE_FORMAT,
        )
        log_format = "%(name)s: %(message)s"
    else:
        handler = logging.StreamHandler(sys.stdout)
        log_format = LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt=DATE_FORMAT,
        handlers=[handler],
        force=True,
    )

    # Our access line replaces uvicorn's; the drivers log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("geopy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, URL, status, duration and response size for each request.

    Level follows the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
    /health is skipped; probes hit it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        if path == "/health":
            return await self._call_app(request, call_next)

        url = path
        if request.url.query:
            url = f"{path}?{request.url.query}"

        response = await self._call_app(request, call_next)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        size = response.headers.get("content-length") or "0"
        rid = request_id_var.get("")

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms - %sb [%s]",
            method,
            url,
            status,
            duration_ms,
            size,
            rid,
            extra={
                "request_id": rid,
                "method": method,
                "url": url,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "content_length": int(size) if size.isdigit() else 0,
            },
        )

        return response

    @staticmethod
    async def _call_app(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Exception handlers registered for `Exception` run in ServerErrorMiddleware,
        # outside this one; convert here so the request still gets its access line
        try:
            return await call_next(request)
        except Exception as exc:
            return error_response(exc)
