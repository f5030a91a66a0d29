"""Persistence contract shared by every catalog repository.

Services talk to these abstractions only; the Django implementations are
wired in by the views and the seed command.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

EntityT = TypeVar("EntityT")


class IRepository(ABC, Generic[EntityT]):
    """Look up, persist and remove one kind of catalog entity."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[EntityT]:
        """``None`` when no row matches or ``id`` is not a valid UUID."""

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        ...

    @abstractmethod
    def delete(self, id: str) -> bool:
        """``True`` if a row was removed or retired, ``False`` if none matched."""
