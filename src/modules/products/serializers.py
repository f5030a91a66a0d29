"""Product and variant DRF serializers (response projections).

Input validation lives in the Pydantic DTOs (``dtos.py``); these
serializers only shape service results into JSON.  ``category_name`` and
the listing aggregates are annotations added by the repository.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product, Variant


class VariantSerializer(serializers.ModelSerializer):
    """A single variant."""

    product_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            "id",
            "product_id",
            "sku",
            "name",
            "price_cents",
            "inventory_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Product basic fields with the joined category name."""

    category_id = serializers.UUIDField(read_only=True, allow_null=True)
    category_name = serializers.CharField(read_only=True, allow_null=True, default=None)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category_id",
            "category_name",
            "status",
            "deleted_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductDetailSerializer(ProductSerializer):
    """Product with its full variant set, oldest variant first."""

    variants = VariantSerializer(many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ["variants"]
        read_only_fields = fields


class ProductListSerializer(ProductSerializer):
    """Listing row: product fields plus aggregates over its variants."""

    variant_count = serializers.IntegerField(read_only=True)
    min_price_cents = serializers.IntegerField(read_only=True, allow_null=True)
    max_price_cents = serializers.IntegerField(read_only=True, allow_null=True)
    total_inventory = serializers.IntegerField(read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + [
            "variant_count",
            "min_price_cents",
            "max_price_cents",
            "total_inventory",
        ]
        read_only_fields = fields
