"""API-wide error formatting.

Every non-2xx response produced by the API carries a single
``{"error": "<message>"}`` body.  Domain exceptions are translated by the
views; this module covers what reaches DRF's exception handling:

- DRF ``APIException`` subclasses (malformed JSON, unsupported media type,
  method not allowed, ...) keep their status code.
- ``django.db.DatabaseError`` becomes a 500 carrying the store's message.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.db import DatabaseError
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def error_response(message: str, status_code: int) -> Response:
    """Build the standard ``{"error": ...}`` response."""
    return Response({"error": message}, status=status_code)


def validation_message(exc: PydanticValidationError) -> str:
    """Return the message of the first failing rule of a Pydantic error.

    Errors raised from our own validators carry the original ``ValueError``
    in ``ctx``; its text is returned as-is.  Type and shape errors are
    prefixed with the dotted location of the offending field.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]


def _flatten_detail(detail: Any) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _flatten_detail(value)
            return message if key == "non_field_errors" else f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _flatten_detail(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """DRF ``EXCEPTION_HANDLER`` producing ``{"error": ...}`` bodies."""
    response = exception_handler(exc, context)
    if response is not None:
        data = response.data
        if isinstance(data, dict) and "detail" in data:
            data = data["detail"]
        response.data = {"error": _flatten_detail(data)}
        return response

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "api.store_error",
            view=type(view).__name__ if view is not None else None,
            error=str(exc),
        )
        return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return None
