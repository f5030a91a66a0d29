"""Product and variant API views.

Expose ``ProductService`` / ``VariantService`` via HTTP using DRF
ViewSets.  Request bodies are parsed into Pydantic DTOs, domain exceptions
are caught and translated into status codes, and every error body has the
shape ``{"error": "<message>"}``.  Store failures are not caught here; the
project exception handler turns them into 500 responses.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.exceptions import CategoryNotFound
from modules.categories.repositories import CategoryDjangoRepository
from modules.core.exceptions import error_response, validation_message
from modules.products.dtos import (
    CreateProductDTO,
    ProductListQueryDTO,
    UpdateProductDTO,
    UpdateVariantDTO,
)
from modules.products.exceptions import (
    LastVariantError,
    ProductNotFound,
    SkuAlreadyExists,
    VariantNotFound,
)
from modules.products.repositories import ProductDjangoRepository, VariantDjangoRepository
from modules.products.serializers import (
    ProductDetailSerializer,
    ProductListSerializer,
    ProductSerializer,
    VariantSerializer,
)
from modules.products.services import ProductService, VariantService

PRODUCT_NOT_FOUND = "Product not found"
VARIANT_NOT_FOUND = "Variant not found"


class ProductViewSet(GenericViewSet):
    """ViewSet for the Product aggregate.

    Uses ``ProductService`` with the Django repositories (DIP).  Does
    **not** extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    serializer_class = ProductDetailSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            product_repository=ProductDjangoRepository(),
            variant_repository=VariantDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products?search=&category_id="""
        try:
            query = ProductListQueryDTO.model_validate(request.query_params.dict())
        except PydanticValidationError as exc:
            return error_response(validation_message(exc), status.HTTP_400_BAD_REQUEST)

        products = self._service.list_products(query.filters())
        return Response(ProductListSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return error_response(PRODUCT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response(ProductDetailSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        try:
            dto = CreateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(validation_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create_product(dto)
        except (SkuAlreadyExists, CategoryNotFound) as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(
            ProductDetailSerializer(product).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/products/{pk}

        Merge-patch: fields that are omitted or ``null`` keep their value.
        """
        try:
            self._service.ensure_product_exists(pk)
        except ProductNotFound:
            return error_response(PRODUCT_NOT_FOUND, status.HTTP_404_NOT_FOUND)

        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(validation_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return error_response(PRODUCT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except CategoryNotFound as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk} (soft delete)."""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return error_response(PRODUCT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response({"success": True})


class VariantViewSet(GenericViewSet):
    """ViewSet for single variants; creation happens through the product."""

    serializer_class = VariantSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = VariantService(repository=VariantDjangoRepository())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/variants/{pk}"""
        try:
            variant = self._service.get_variant(pk)
        except VariantNotFound:
            return error_response(VARIANT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response(VariantSerializer(variant).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/variants/{pk}

        Existence is checked before the body, so an unknown id is a 404
        whatever the payload.
        """
        try:
            self._service.get_variant(pk)
        except VariantNotFound:
            return error_response(VARIANT_NOT_FOUND, status.HTTP_404_NOT_FOUND)

        try:
            dto = UpdateVariantDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(validation_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            variant = self._service.update_variant(pk, dto)
        except VariantNotFound:
            return error_response(VARIANT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except SkuAlreadyExists as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(VariantSerializer(variant).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/variants/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/variants/{pk} (hard delete; the last variant is kept)."""
        try:
            self._service.delete_variant(pk)
        except VariantNotFound:
            return error_response(VARIANT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except LastVariantError as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
        return Response({"success": True})
