"""Product and variant domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """No product row matches the requested id (soft-deleted rows do match)."""


class VariantNotFound(Exception):
    """No variant row matches the requested id."""


class SkuAlreadyExists(Exception):
    """A variant SKU collides with another variant anywhere in the catalog."""

    def __init__(self, sku: str) -> None:
        super().__init__(f"SKU '{sku}' already exists")
        self.sku = sku


class LastVariantError(Exception):
    """Deleting the variant would leave its product without any variant."""
