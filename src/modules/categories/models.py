"""Category lookup table.

Categories are referenced weakly by products: a product may point at one
category, and removing a category clears that reference instead of
cascading.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Category(BaseModel):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
