"""Liveness endpoint used by the container orchestrator and the admin UI."""

import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def _probe_database(alias: str = "default") -> Dict[str, Any]:
    started = time.monotonic()
    with connections[alias].cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health: 200 when the catalog store answers, 503 otherwise."""
    try:
        database = _probe_database()
    except DatabaseError as exc:
        logger.error("health.database_down", error=str(exc))
        database = {"status": "down"}

    healthy = database["status"] == "up"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": timezone.now().isoformat(),
        "services": {"database": database},
    }
    logger.info("health.checked", status=body["status"])
    return JsonResponse(body, status=200 if healthy else 503)
