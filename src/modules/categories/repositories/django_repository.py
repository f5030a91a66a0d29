"""Django ORM implementation of the Category repository."""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self) -> List[Category]:
        return list(Category.objects.order_by("name"))

    def get_or_create(self, name: str) -> Category:
        category, created = Category.objects.get_or_create(name=name.strip())
        if created:
            logger.info("category.created", category_id=str(category.id), name=category.name)
        return category

    def save(self, entity: Category) -> Category:
        entity.save()
        return entity

    def delete(self, id: str) -> bool:
        """Hard-delete a category; products pointing at it keep living uncategorised."""
        deleted, _ = Category.objects.filter(id=id).delete()
        return deleted > 0
