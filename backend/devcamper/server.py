"""
DevCamper Backend — Server Entrypoint
=======================================

What:  Runs the API under uvicorn (`devcamper-server`).
Why:   Running uvicorn programmatically lets the process react to errors
       nobody awaited: a failed background task or a callback that raised.
How:   UnhandledErrorGuard is installed as the event loop's exception
       handler. On the first unhandled error it logs it and asks uvicorn to
       shut down gracefully (finish in-flight requests, run lifespan
       shutdown); the process then exits with status 1.

Exit codes:
    0  clean shutdown (Ctrl+C / SIGTERM)
    1  startup failed, or an unhandled error closed the server
"""

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

import uvicorn

from devcamper.config import settings

logger = logging.getLogger(__name__)


class UnhandledErrorGuard:
    """Event loop exception handler that closes the server on the first error."""

    def __init__(self, server: uvicorn.Server):
        self.server = server
        self.error: Optional[BaseException] = None
        self.tripped = False

    def __call__(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        message = str(exc) if exc is not None else context.get("message", "unknown error")
        logger.error("Error: %s", message, exc_info=exc)

        if not self.tripped:
            self.tripped = True
            self.error = exc
            logger.error("Closing server after unhandled error")
        self.server.should_exit = True


async def serve(server: uvicorn.Server) -> int:
    """Run the server until it stops; returns the process exit code."""
    guard = UnhandledErrorGuard(server)
    asyncio.get_running_loop().set_exception_handler(guard)

    await server.serve()

    if not server.started:
        # Lifespan startup raised (database unreachable, geocoder unset)
        logger.critical("Server failed to start")
        return 1
    return 1 if guard.tripped else 0


def main() -> int:
    config = uvicorn.Config(
        "devcamper.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    return asyncio.run(serve(uvicorn.Server(config)))


if __name__ == "__main__":
    sys.exit(main())
