"""Category domain exceptions."""

from __future__ import annotations


class CategoryNotFound(Exception):
    """A product references a category that does not exist."""
