"""Catalog constants shared by DTOs, models and services.

Kept free of Django imports so the DTO layer stays framework-agnostic.
"""

from __future__ import annotations

from typing import Any, Dict

STATUS_ACTIVE = "active"
STATUS_DRAFT = "draft"
STATUS_ARCHIVED = "archived"

PRODUCT_STATUSES = (STATUS_ACTIVE, STATUS_DRAFT, STATUS_ARCHIVED)

# Applied once, right before persistence, to fields the client left out.
PRODUCT_DEFAULTS: Dict[str, Any] = {
    "description": None,
    "category_id": None,
    "status": STATUS_ACTIVE,
}

VARIANT_DEFAULTS: Dict[str, Any] = {
    "name": "Default",
    "price_cents": 0,
    "inventory_count": 0,
}

# Largest value a PositiveIntegerField column holds on every supported backend.
MAX_COUNT = 2_147_483_647
