from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from rest_framework.test import APIClient

from modules.categories.models import Category
from modules.products.models import Product, Variant


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def category():
    return Category.objects.create(name="Apparel")


@pytest.fixture()
def make_product():
    """Persist a product with variants directly through the ORM.

    ``variants`` is a list of ``(sku, price_cents, inventory_count)`` tuples;
    one ``DEFAULT-<n>`` variant is created when omitted.
    """
    counter = {"n": 0}

    def _make(
        name: str = "Widget",
        variants: Optional[List[tuple]] = None,
        **fields: Any,
    ) -> Product:
        counter["n"] += 1
        product = Product.objects.create(name=name, **fields)
        for sku, price_cents, inventory_count in variants or [
            (f"DEFAULT-{counter['n']}", 1000, 1)
        ]:
            Variant.objects.create(
                product=product,
                sku=sku,
                price_cents=price_cents,
                inventory_count=inventory_count,
            )
        return product

    return _make


@pytest.fixture()
def product_payload():
    """Builder of valid ``POST /api/products`` bodies."""

    def _payload(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": "Classic Shirt",
            "description": "Cotton shirt",
            "variants": [
                {"sku": "SHIRT-S", "name": "Small", "price_cents": 2500, "inventory_count": 10},
            ],
        }
        payload.update(overrides)
        return payload

    return _payload
