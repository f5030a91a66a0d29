"""Product repositories package."""

from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    VariantDjangoRepository,
)
from modules.products.repositories.interfaces import IProductRepository, IVariantRepository

__all__ = [
    "IProductRepository",
    "IVariantRepository",
    "ProductDjangoRepository",
    "VariantDjangoRepository",
]
