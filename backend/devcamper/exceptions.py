"""
DevCamper Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for request errors and fatal startup errors.
How:   Each exception carries a message, an HTTP status code and an optional
       context dict. The error normalizer (middleware/error_handler.py) turns
       any of them, along with driver and validation errors, into
       {"success": false, "error": ...} responses.
Who:   Raised by services, the database connector and the seeder.

Exception Hierarchy:
    DevCamperError (base, status_code=500)
    ├── CastError                   → 404 (malformed bootcamp id)
    ├── ValidationError             → 400 (one message per invalid field)
    ├── DatabaseConnectionError     → fatal at startup
    ├── GeocoderConfigurationError  → fatal at startup
    ├── GeocodingError              → 503 (upstream lookup failed)
    └── SeedDataError               → seeder exits non-zero
"""

from typing import Any, Dict, Optional


class DevCamperError(Exception):
    """
    Base exception for all DevCamper application errors.

    Attributes:
        message:      User-facing error description
        status_code:  HTTP status used when nothing more specific applies
        context:      Additional debug info (logged, never returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.context = context or {}
        super().__init__(self.message)


class CastError(DevCamperError):
    """
    Raised when a value cannot be cast to the type a field requires.

    The normalizer recognizes it by `name`, the same way it recognizes any
    other object that reports itself as a CastError, and answers 404 with
    the offending value in the message.
    """

    name = "CastError"

    def __init__(self, value: Any, path: str = "_id", kind: str = "ObjectId"):
        self.value = value
        self.path = path
        self.kind = kind
        super().__init__(
            message=f'Cast to {kind} failed for value "{value}" at path "{path}"',
            status_code=404,
            context={"value": str(value), "path": path},
        )


class FieldError:
    """A single field failure inside a ValidationError."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message

    def __repr__(self) -> str:
        return f"FieldError(path={self.path!r}, message={self.message!r})"


class ValidationError(DevCamperError):
    """
    Raised when a document fails validation on one or more fields.

    `errors` maps each field to a FieldError, so the normalizer can report
    every failing field at once instead of only the first.
    """

    name = "ValidationError"

    def __init__(self, errors: Dict[str, str]):
        self.errors = {path: FieldError(path, msg) for path, msg in errors.items()}
        super().__init__(
            message="Validation failed: " + ", ".join(
                f"{path}: {msg}" for path, msg in errors.items()
            ),
            status_code=400,
            context={"fields": list(errors)},
        )


class DatabaseConnectionError(DevCamperError):
    """
    Raised when MongoDB cannot be reached at startup.

    The server and the seeder treat this as fatal: log it and exit.
    """

    def __init__(
        self,
        message: str = "Could not connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=500, context=context)


class GeocoderConfigurationError(DevCamperError):
    """Raised when the geocoder provider or its credentials are missing or invalid."""

    def __init__(
        self,
        message: str = "Geocoder provider or API key is not set in environment variables.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=500, context=context)


class GeocodingError(DevCamperError):
    """
    Raised when an address lookup fails after all retries.

    HTTP: 503 Service Unavailable (the upstream provider, not us, is failing)
    """

    def __init__(
        self,
        message: str = "Geocoding service is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=503, context=context)


class SeedDataError(DevCamperError):
    """Raised when the seeder fixture is missing or not a JSON array of objects."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=500, context=context)
