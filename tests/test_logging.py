import logging
import uuid

import pytest

REQUEST_ID = "X-Request-ID"


@pytest.fixture()
def request_logs(caplog):
    caplog.set_level(logging.INFO, logger="modules.core.middleware")

    def _events():
        return [
            record.msg
            for record in caplog.records
            if record.name == "modules.core.middleware" and isinstance(record.msg, dict)
        ]

    return _events


class TestCorrelationIdMiddleware:
    def test_echoes_incoming_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="catalog-ui-42")
        assert response[REQUEST_ID] == "catalog-ui-42"

    def test_generates_request_id_when_missing(self, client):
        generated = client.get("/health")[REQUEST_ID]
        assert uuid.UUID(generated).version == 4

    def test_api_errors_still_carry_request_id(self, client):
        response = client.get(f"/api/products/{uuid.uuid4()}", HTTP_X_REQUEST_ID="req-404")
        assert response.status_code == 404
        assert response[REQUEST_ID] == "req-404"

    def test_request_events_bound_to_correlation_id(self, client, request_logs):
        client.get("/api/categories", HTTP_X_REQUEST_ID="trace-me")

        events = request_logs()
        assert [event["event"] for event in events] == ["request_started", "request_finished"]
        assert all(event["correlation_id"] == "trace-me" for event in events)
        assert events[0]["path"] == "/api/categories"
        assert events[1]["status_code"] == 200
        assert events[1]["duration_ms"] >= 0
