"""Django ORM implementation of the Product and Variant repositories.

Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions, and malformed ids are treated as
"not found".  The one translation done here is the store-level SKU unique
index: an ``IntegrityError`` caused by a colliding SKU surfaces as
``SkuAlreadyExists``, which closes the gap left by the service's
check-then-insert.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction
from django.db.models import Count, F, Max, Min, Sum
from django.db.models.functions import Coalesce

from modules.products.exceptions import SkuAlreadyExists
from modules.products.filters import ProductFilter
from modules.products.models import Product, Variant
from modules.products.repositories.interfaces import IProductRepository, IVariantRepository

logger = structlog.get_logger(__name__)


def _save_variant(variant: Variant, **kwargs) -> None:
    """Save inside a savepoint so a SKU collision leaves the outer transaction usable."""
    try:
        with transaction.atomic():
            variant.save(**kwargs)
    except IntegrityError as exc:
        clash = Variant.objects.filter(sku=variant.sku)
        if not variant._state.adding:
            clash = clash.exclude(id=variant.id)
        if clash.exists():
            raise SkuAlreadyExists(variant.sku) from exc
        raise


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _with_category(self) -> models.QuerySet:
        return Product.objects.annotate(category_name=F("category__name"))

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key, soft-deleted or not.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._with_category().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_with_variants(self, id: str) -> Optional[Product]:
        """Like ``get_by_id`` with ``variants`` prefetched (oldest first)."""
        try:
            return (
                self._with_category()
                .prefetch_related("variants")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List live products, most recent first.

        Accepted filters: ``search`` (case-insensitive substring of name or
        description) and ``category_id``.  Each row carries
        ``category_name``, ``variant_count``, ``min_price_cents``,
        ``max_price_cents`` and ``total_inventory``.
        """
        queryset = Product.objects.alive()
        if filters:
            queryset = ProductFilter(filters, queryset=queryset).qs
        queryset = queryset.annotate(
            category_name=F("category__name"),
            variant_count=Count("variants"),
            min_price_cents=Min("variants__price_cents", output_field=models.IntegerField()),
            max_price_cents=Max("variants__price_cents", output_field=models.IntegerField()),
            total_inventory=Coalesce(
                Sum("variants__inventory_count"),
                0,
                output_field=models.IntegerField(),
            ),
        ).order_by("-created_at", "-id")
        return list(queryset)

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Product:
        """Create a product with its variants atomically.

        ``data`` keys:
        - ``name``, ``description``, ``category_id``, ``status``
        - ``variants``: list of dicts with ``sku``, ``name``,
          ``price_cents``, ``inventory_count``
        """
        product = Product(
            name=data["name"],
            description=data.get("description"),
            category_id=data.get("category_id"),
            status=data["status"],
        )
        product.save()

        variants = data.get("variants", [])
        for variant_data in variants:
            _save_variant(Variant(product=product, **variant_data))

        logger.info(
            "product.persisted",
            product_id=str(product.id),
            variant_count=len(variants),
        )
        return product

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a product by ID; its variants are left in place.

        Returns ``True`` if the product was found and soft-deleted,
        ``False`` if no product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        return True


class VariantDjangoRepository(IVariantRepository):
    """Concrete Variant repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Variant]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Variant.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def save(self, entity: Variant) -> Variant:
        """Persist a variant, translating a SKU collision into ``SkuAlreadyExists``."""
        _save_variant(entity)
        logger.info("variant.saved", variant_id=str(entity.id), sku=entity.sku)
        return entity

    def delete(self, id: str) -> bool:
        """Physically remove a variant."""
        deleted, _ = Variant.objects.filter(id=id).delete()
        return deleted > 0

    def sku_exists(self, sku: str, exclude_id: Optional[str] = None) -> bool:
        queryset = Variant.objects.filter(sku=sku.strip())
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def count_siblings(self, product_id: Any) -> int:
        """Count the product's variants while holding a lock on the product row.

        Callers must be inside a transaction for the lock to outlive this
        call; concurrent last-variant checks on the same product then
        serialize on databases that support ``SELECT ... FOR UPDATE``.
        """
        Product.objects.select_for_update().filter(id=product_id).first()
        return Variant.objects.filter(product_id=product_id).count()
