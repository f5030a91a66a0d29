"""Product and variant service layer (Use Cases).

The only place where rules spanning several rows are checked.
Persistence is delegated to repositories injected at construction.

Product aggregate rules:
- A product is created together with at least one variant, in a single
  transaction; no product-without-variants state is ever observable.
- Variant SKUs are unique across the whole catalog.
- Price and inventory are never negative (validated by the DTOs).
- Products are soft-deleted; listings skip them, direct look-ups don't.

Variant rules:
- Updates are merge-patches; a new SKU must not belong to another variant.
- The last variant of a product cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.categories.exceptions import CategoryNotFound
from modules.products.exceptions import (
    LastVariantError,
    ProductNotFound,
    SkuAlreadyExists,
    VariantNotFound,
)

if TYPE_CHECKING:
    from uuid import UUID

    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO, UpdateVariantDTO
    from modules.products.models import Product, Variant
    from modules.products.repositories.interfaces import (
        IProductRepository,
        IVariantRepository,
    )

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for the Product aggregate.

    Receives its repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        variant_repository: IVariantRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._product_repo = product_repository
        self._variant_repo = variant_repository
        self._category_repo = category_repository

    def _ensure_category(self, category_id: Optional[UUID]) -> None:
        if category_id is not None and not self._category_repo.get_by_id(str(category_id)):
            raise CategoryNotFound(f"Category {category_id} not found")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product and all of its variants atomically.

        Shape rules (name, non-empty variant list, SKU presence, non-negative
        numbers) were enforced by the DTO.  Here every SKU is checked against
        the store, stopping at the first collision.

        Raises:
            SkuAlreadyExists: a SKU is already used by some variant.
            CategoryNotFound: ``category_id`` references no category.
        """
        dto = dto.with_defaults()
        log = logger.bind(name=dto.name, variant_count=len(dto.variants))

        for variant in dto.variants:
            if self._variant_repo.sku_exists(variant.sku):
                log.warning("product.duplicate_sku", sku=variant.sku)
                raise SkuAlreadyExists(variant.sku)

        self._ensure_category(dto.category_id)

        product = self._product_repo.create(dto.model_dump())
        log.info("product.created", product_id=str(product.id))
        return self._product_repo.get_with_variants(str(product.id)) or product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Merge the supplied basic fields into the product.

        Variants are not touched.  ``updated_at`` is refreshed even when
        nothing else changes.

        Raises:
            ProductNotFound: if the product does not exist.
            CategoryNotFound: ``category_id`` references no category.
        """
        product = self._product_repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found")

        changes = dto.changes()
        self._ensure_category(changes.get("category_id"))

        for field, value in changes.items():
            setattr(product, field, value)

        self._product_repo.save(product)
        logger.info("product.updated", product_id=str(id), fields=sorted(changes))
        return self._product_repo.get_by_id(id) or product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Soft-delete a product; its variants stay persisted.

        Deleting an already-deleted product re-stamps ``deleted_at``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._product_repo.delete(id):
            raise ProductNotFound(f"Product {id} not found")
        logger.info("product.soft_deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return live products with variant aggregates, newest first."""
        return self._product_repo.list(filters)

    def ensure_product_exists(self, id: str) -> None:
        """Raises ``ProductNotFound`` unless a product (live or not) has ``id``."""
        if not self._product_repo.get_by_id(id):
            raise ProductNotFound(f"Product {id} not found")

    def get_product(self, id: str) -> Product:
        """Retrieve a product with its variants, whether soft-deleted or not.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._product_repo.get_with_variants(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found")
        return product


class VariantService:
    """Application service for single-variant use-cases."""

    def __init__(self, repository: IVariantRepository) -> None:
        self._repo = repository

    def get_variant(self, id: str) -> Variant:
        """Raises ``VariantNotFound`` when no variant matches."""
        variant = self._repo.get_by_id(id)
        if not variant:
            raise VariantNotFound(f"Variant {id} not found")
        return variant

    @transaction.atomic
    def update_variant(self, id: str, dto: UpdateVariantDTO) -> Variant:
        """Merge the supplied fields into the variant.

        Raises:
            VariantNotFound: if the variant does not exist.
            SkuAlreadyExists: the new SKU belongs to another variant.
        """
        variant = self.get_variant(id)
        log = logger.bind(variant_id=str(variant.id))

        changes = dto.changes()
        sku = changes.get("sku")
        if sku is not None and self._repo.sku_exists(sku, exclude_id=str(variant.id)):
            log.warning("variant.duplicate_sku", sku=sku)
            raise SkuAlreadyExists(sku)

        for field, value in changes.items():
            setattr(variant, field, value)

        variant = self._repo.save(variant)
        log.info("variant.updated", fields=sorted(changes))
        return variant

    @transaction.atomic
    def delete_variant(self, id: str) -> None:
        """Hard-delete a variant unless it is the last one of its product.

        Raises:
            VariantNotFound: if the variant does not exist.
            LastVariantError: the product has no other variant.
        """
        variant = self.get_variant(id)
        log = logger.bind(variant_id=str(variant.id), product_id=str(variant.product_id))

        if self._repo.count_siblings(variant.product_id) <= 1:
            log.warning("variant.last_variant_refused")
            raise LastVariantError("Cannot delete the last variant of a product")

        self._repo.delete(id)
        log.info("variant.deleted")
