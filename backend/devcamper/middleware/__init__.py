# Middleware package init
"""
DevCamper Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for the access log line and the response
    2. Access Logging: method, URL, status, duration and size per request
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the same chain in reverse, so the access
    log sees the final status code and the response carries X-Request-ID.

The error normalizer (error_handler.py) is registered as exception handlers
rather than middleware; it turns every error into the error envelope.
"""
