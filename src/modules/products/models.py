"""Product aggregate: products and their variants.

Business rules backed by the schema:
- Every variant belongs to exactly one product (non-null FK).
- SKU is unique across ALL variants, regardless of owning product.
- ``price_cents`` and ``inventory_count`` are never negative.
- Products are soft-deleted via ``deleted_at`` (inherited from
  SoftDeleteModel); variants are removed physically.

"At least one variant per live product" spans rows and is enforced by the
Service Layer, not by a constraint.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel
from modules.products.constants import STATUS_ACTIVE, STATUS_ARCHIVED, STATUS_DRAFT


class ProductStatus(models.TextChoices):
    ACTIVE = STATUS_ACTIVE, "Active"
    DRAFT = STATUS_DRAFT, "Draft"
    ARCHIVED = STATUS_ARCHIVED, "Archived"


class Product(SoftDeleteModel):
    """Product aggregate root.

    ``name`` is trimmed on save.  ``category`` is a weak reference: it is
    only used for lookups and is cleared if the category disappears.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True, default=None)  # noqa: DJ001
    category = models.ForeignKey(
        "categories.Category",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="products",
    )
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.ACTIVE,
    )

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="products_status_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name


class Variant(BaseModel):
    """A purchasable, SKU-bearing unit of a product."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
    )
    sku = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255, default="Default")
    price_cents = models.PositiveIntegerField(default=0)
    inventory_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "variants"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_cents__gte=0),
                name="variants_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(inventory_count__gte=0),
                name="variants_inventory_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.sku:
            self.sku = self.sku.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
