"""Category API views.

Categories are a lookup table for the admin UI dropdown; only listing is
exposed over HTTP.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.categories.repositories import CategoryDjangoRepository
from modules.categories.serializers import CategorySerializer


class CategoryViewSet(ViewSet):
    """GET /api/categories"""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repo = CategoryDjangoRepository()

    def list(self, request: Request) -> Response:
        serializer = CategorySerializer(self._repo.list(), many=True)
        return Response(serializer.data)
