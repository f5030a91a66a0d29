"""Unit tests for CategoryDjangoRepository."""

from __future__ import annotations

import pytest

from modules.categories.models import Category
from modules.categories.repositories import CategoryDjangoRepository, ICategoryRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CategoryDjangoRepository()


class TestCategoryRepository:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, ICategoryRepository)

    def test_get_by_id(self, repo, category):
        assert repo.get_by_id(str(category.id)) == category

    def test_get_by_id_malformed(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_list_sorted_by_name(self, repo):
        for name in ("Footwear", "Accessories", "Apparel"):
            Category.objects.create(name=name)
        assert [c.name for c in repo.list()] == ["Accessories", "Apparel", "Footwear"]

    def test_get_or_create_is_idempotent(self, repo):
        first = repo.get_or_create("Apparel")
        second = repo.get_or_create(" Apparel ")
        assert first.id == second.id
        assert Category.objects.count() == 1

    def test_delete(self, repo, category):
        assert repo.delete(str(category.id)) is True
        assert repo.delete(str(category.id)) is False
