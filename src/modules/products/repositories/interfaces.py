"""Product and variant repository interfaces.

Extend ``IRepository`` with the look-ups the aggregate rules need:
SKU collisions, sibling counts and the annotated listing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product, Variant


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List live products annotated with category name and variant aggregates."""

    @abstractmethod
    def get_with_variants(self, id: str) -> Optional[Product]:
        """Retrieve a product (live or soft-deleted) with category name and variants."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Product:
        """Insert a product and all of its variants as one unit."""


class IVariantRepository(IRepository["Variant"]):
    """Repository contract for variants."""

    @abstractmethod
    def sku_exists(self, sku: str, exclude_id: Optional[str] = None) -> bool:
        """Whether any variant (other than ``exclude_id``) already uses ``sku``."""

    @abstractmethod
    def count_siblings(self, product_id: Any) -> int:
        """Number of variants owned by ``product_id``, locking the product row."""
