"""Category repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.categories.models import Category


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for the Category lookup table."""

    @abstractmethod
    def list(self) -> List[Category]:
        """List every category ordered by name."""

    @abstractmethod
    def get_or_create(self, name: str) -> Category:
        """Return the category with ``name``, creating it when missing."""
