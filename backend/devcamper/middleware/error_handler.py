"""
DevCamper Backend — Error Normalizer
======================================

What:  Turns any error raised while handling a request into
       {"success": false, "error": <message>} with a matching status code.
How:   classify_error() sorts an error into an ErrorKind by its shape (not
       its class), then ERROR_TABLE gives the status and builds the message.
       register_exception_handlers() installs one handler for every error
       family FastAPI can surface.

Recognized shapes (highest precedence first):
    name == "ValidationError"   → 400  [one message per invalid field]
    code == 11000               → 400  "Duplicate field value entered"
    name == "CastError"         → 404  "Bootcamp not found with id of <value>"
    anything else               → status_code or 500, own message or "Server Error"

Shape-based matching means driver errors (pymongo's DuplicateKeyError has
code 11000), pydantic errors (named ValidationError) and our own exceptions
all land in the same table.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Tuple, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devcamper.exceptions import DevCamperError
from devcamper.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

DUPLICATE_KEY_CODE = 11000
DEFAULT_MESSAGE = "Server Error"

ErrorMessage = Union[str, List[str]]


class ErrorKind(str, Enum):
    CAST = "cast"
    DUPLICATE_KEY = "duplicate_key"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class ErrorRule(NamedTuple):
    status_code: int
    build_message: Callable[[Any], ErrorMessage]


def _error_name(exc: Any) -> str:
    name = getattr(exc, "name", None)
    return name if isinstance(name, str) else type(exc).__name__


def _is_duplicate_key(exc: Any) -> bool:
    if getattr(exc, "code", None) == DUPLICATE_KEY_CODE:
        return True
    # BulkWriteError reports code 65; the real cause sits in writeErrors
    details = getattr(exc, "details", None)
    if isinstance(details, dict):
        write_errors = details.get("writeErrors") or []
        return any(err.get("code") == DUPLICATE_KEY_CODE for err in write_errors)
    return False


def classify_error(exc: Any) -> ErrorKind:
    """
    An error matching several shapes takes the highest precedence one:
    validation, then duplicate key, then cast.
    """
    name = _error_name(exc)
    if name == "ValidationError" or isinstance(exc, RequestValidationError):
        return ErrorKind.VALIDATION
    if _is_duplicate_key(exc):
        return ErrorKind.DUPLICATE_KEY
    if name == "CastError":
        return ErrorKind.CAST
    return ErrorKind.UNKNOWN


def _field_messages(exc: Any) -> List[str]:
    errors = getattr(exc, "errors", None)
    if callable(errors):
        # pydantic / FastAPI: errors() -> [{"loc": (...), "msg": "..."}, ...]
        return [str(err.get("msg", "")) for err in errors()]
    if isinstance(errors, dict):
        # Field map: {"name": <obj with .message> | "message"}
        return [
            val if isinstance(val, str) else str(getattr(val, "message", val))
            for val in errors.values()
        ]
    return [_own_message(exc) or DEFAULT_MESSAGE]


def _own_message(exc: Any) -> str:
    for attr in ("message", "detail"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value:
            return value
    return str(exc) if isinstance(exc, BaseException) else ""


ERROR_TABLE: Dict[ErrorKind, ErrorRule] = {
    ErrorKind.CAST: ErrorRule(
        404, lambda exc: f"Bootcamp not found with id of {getattr(exc, 'value', '')}"
    ),
    ErrorKind.DUPLICATE_KEY: ErrorRule(400, lambda exc: "Duplicate field value entered"),
    ErrorKind.VALIDATION: ErrorRule(400, _field_messages),
}


def normalize_error(exc: Any) -> Tuple[int, ErrorMessage]:
    """
    Map an error to (HTTP status, message).

    Unrecognized errors keep their own status_code when they carry one
    (HTTPException, DevCamperError) and default to 500.
    """
    kind = classify_error(exc)
    rule = ERROR_TABLE.get(kind)
    if rule is not None:
        return rule.status_code, rule.build_message(exc)

    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int):
        status_code = 500
    return status_code, _own_message(exc) or DEFAULT_MESSAGE


def error_response(exc: Any) -> JSONResponse:
    status_code, message = normalize_error(exc)
    rid = request_id_var.get("")

    if status_code >= 500:
        logger.error(
            "[%s] %s: %s", rid, type(exc).__name__, message,
            exc_info=exc if isinstance(exc, BaseException) else None,
        )
    else:
        logger.warning("[%s] %s: %s", rid, type(exc).__name__, message)

    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the normalizer as the terminal handler for every error family.

    FastAPI picks the most specific registered class, so each family is
    listed explicitly; Exception catches whatever is left.
    """

    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        return error_response(exc)

    for exc_class in (
        DevCamperError,
        PyMongoError,
        PydanticValidationError,
        RequestValidationError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_error)
