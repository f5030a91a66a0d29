"""Unit tests for the API-wide error formatting."""

from __future__ import annotations

import pytest
from django.db import DatabaseError, OperationalError
from rest_framework import status
from rest_framework.exceptions import MethodNotAllowed, NotFound, ParseError, ValidationError

from modules.core.exceptions import api_exception_handler, error_response

pytestmark = pytest.mark.unit


def _handle(exc):
    return api_exception_handler(exc, {"view": None})


class TestErrorResponse:
    def test_body_and_status(self):
        response = error_response("Product not found", status.HTTP_404_NOT_FOUND)
        assert response.status_code == 404
        assert response.data == {"error": "Product not found"}


class TestApiExceptionHandler:
    def test_parse_error_keeps_status(self):
        response = _handle(ParseError("JSON parse error - Expecting value"))
        assert response.status_code == 400
        assert response.data == {"error": "JSON parse error - Expecting value"}

    def test_not_found(self):
        response = _handle(NotFound("Nothing here"))
        assert response.status_code == 404
        assert response.data == {"error": "Nothing here"}

    def test_method_not_allowed(self):
        response = _handle(MethodNotAllowed("PUT"))
        assert response.status_code == 405
        assert response.data == {"error": 'Method "PUT" not allowed.'}

    def test_field_errors_flattened_to_first(self):
        response = _handle(ValidationError({"name": ["This field is required."]}))
        assert response.status_code == 400
        assert response.data == {"error": "name: This field is required."}

    def test_list_errors_flattened_to_first(self):
        response = _handle(ValidationError(["first", "second"]))
        assert response.data == {"error": "first"}

    def test_database_error_becomes_500_with_message(self):
        response = _handle(OperationalError("database is locked"))
        assert response.status_code == 500
        assert response.data == {"error": "database is locked"}

    def test_base_database_error_handled(self):
        response = _handle(DatabaseError("connection lost"))
        assert response.status_code == 500

    def test_unrelated_exception_left_to_django(self):
        assert _handle(RuntimeError("boom")) is None
