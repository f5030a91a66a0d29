"""Unit tests for product and variant DTOs.

Covers:
- CreateProductDTO: rule order, trimming, duplicate SKUs, defaults.
- UpdateProductDTO / UpdateVariantDTO: merge-patch ``changes()``.
- ProductListQueryDTO: blank filters ignored, UUID validation.
- validation_message: first failing rule surfaces as plain text.
"""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from modules.core.exceptions import validation_message
from modules.products.constants import MAX_COUNT
from modules.products.dtos import (
    CreateProductDTO,
    CreateVariantDTO,
    ProductListQueryDTO,
    UpdateProductDTO,
    UpdateVariantDTO,
)

pytestmark = pytest.mark.unit


def _first_message(cls, data) -> str:
    with pytest.raises(ValidationError) as excinfo:
        cls.model_validate(data)
    return validation_message(excinfo.value)


# ===========================================================================
# CreateProductDTO
# ===========================================================================


class TestCreateProductDTOValid:
    def test_create_with_valid_data(self):
        dto = CreateProductDTO(name="Shirt", variants=[{"sku": "A"}])
        assert dto.name == "Shirt"
        assert dto.variants[0].sku == "A"

    def test_name_and_sku_are_trimmed(self):
        dto = CreateProductDTO(name="  Shirt  ", variants=[{"sku": "  A-1 "}])
        assert dto.name == "Shirt"
        assert dto.variants[0].sku == "A-1"

    def test_unspecified_fields_stay_none_until_defaults_applied(self):
        dto = CreateProductDTO(name="Shirt", variants=[{"sku": "A"}])
        assert dto.status is None
        assert dto.variants[0].price_cents is None

    def test_frozen(self):
        dto = CreateProductDTO(name="Shirt", variants=[{"sku": "A"}])
        with pytest.raises(ValidationError):
            dto.name = "Other"


class TestCreateProductDTOInvalid:
    def test_missing_name(self):
        assert _first_message(CreateProductDTO, {"variants": [{"sku": "A"}]}) == (
            "Product name is required"
        )

    def test_blank_name(self):
        message = _first_message(CreateProductDTO, {"name": "   ", "variants": [{"sku": "A"}]})
        assert message == "Product name is required"

    def test_name_checked_before_variants(self):
        assert _first_message(CreateProductDTO, {"name": "", "variants": []}) == (
            "Product name is required"
        )

    def test_missing_variants(self):
        assert _first_message(CreateProductDTO, {"name": "Shirt"}) == (
            "At least one variant is required"
        )

    def test_empty_variants(self):
        assert _first_message(CreateProductDTO, {"name": "Shirt", "variants": []}) == (
            "At least one variant is required"
        )

    def test_variant_without_sku(self):
        message = _first_message(
            CreateProductDTO, {"name": "Shirt", "variants": [{"price_cents": 1}]}
        )
        assert message == "Variant SKU is required"

    def test_negative_price(self):
        message = _first_message(
            CreateProductDTO, {"name": "Shirt", "variants": [{"sku": "A", "price_cents": -1}]}
        )
        assert message == "Price must be >= 0"

    def test_negative_inventory(self):
        message = _first_message(
            CreateProductDTO,
            {"name": "Shirt", "variants": [{"sku": "A", "inventory_count": -5}]},
        )
        assert message == "Inventory count must be >= 0"

    def test_sku_checked_before_price(self):
        message = _first_message(
            CreateProductDTO, {"name": "Shirt", "variants": [{"sku": " ", "price_cents": -1}]}
        )
        assert message == "Variant SKU is required"

    def test_duplicate_sku_in_request(self):
        message = _first_message(
            CreateProductDTO,
            {"name": "Shirt", "variants": [{"sku": "A"}, {"sku": " A "}]},
        )
        assert message == "SKU 'A' appears more than once"

    def test_unknown_status(self):
        message = _first_message(
            CreateProductDTO,
            {"name": "Shirt", "variants": [{"sku": "A"}], "status": "deleted"},
        )
        assert message == "Status must be one of: active, draft, archived"

    def test_unknown_field_rejected(self):
        message = _first_message(
            CreateProductDTO, {"name": "Shirt", "variants": [{"sku": "A"}], "price": 5}
        )
        assert message.startswith("price:")

    def test_non_object_body_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate([{"name": "Shirt"}])


class TestCreateProductDefaults:
    def test_product_defaults(self):
        dto = CreateProductDTO(name="Shirt", variants=[{"sku": "A"}]).with_defaults()
        assert dto.status == "active"
        assert dto.description is None
        assert dto.category_id is None

    def test_variant_defaults(self):
        dto = CreateProductDTO(name="Shirt", variants=[{"sku": "A"}]).with_defaults()
        variant = dto.variants[0]
        assert variant.name == "Default"
        assert variant.price_cents == 0
        assert variant.inventory_count == 0

    def test_supplied_values_win_over_defaults(self):
        dto = CreateProductDTO(
            name="Shirt",
            status="draft",
            variants=[{"sku": "A", "name": "Large", "price_cents": 0, "inventory_count": 3}],
        ).with_defaults()
        assert dto.status == "draft"
        assert dto.variants[0].name == "Large"
        assert dto.variants[0].inventory_count == 3

    def test_variant_with_defaults_returns_new_instance(self):
        variant = CreateVariantDTO(sku="A")
        defaulted = variant.with_defaults()
        assert variant.price_cents is None
        assert defaulted.price_cents == 0


# ===========================================================================
# Update DTOs
# ===========================================================================


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        assert UpdateProductDTO().changes() == {}

    def test_changes_only_contains_supplied_fields(self):
        dto = UpdateProductDTO(name=" New ", description=None)
        assert dto.changes() == {"name": "New"}

    def test_blank_name_rejected(self):
        assert _first_message(UpdateProductDTO, {"name": "  "}) == "Product name is required"

    def test_category_id_parsed_as_uuid(self):
        category_id = uuid.uuid4()
        dto = UpdateProductDTO.model_validate({"category_id": str(category_id)})
        assert dto.changes() == {"category_id": category_id}

    def test_variants_not_accepted(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO.model_validate({"variants": []})


class TestUpdateVariantDTO:
    def test_changes_only_contains_supplied_fields(self):
        dto = UpdateVariantDTO(price_cents=0)
        assert dto.changes() == {"price_cents": 0}

    def test_price_checked_before_inventory_and_sku(self):
        message = _first_message(
            UpdateVariantDTO, {"sku": "", "inventory_count": -1, "price_cents": -1}
        )
        assert message == "Price must be >= 0"

    def test_inventory_checked_before_sku(self):
        message = _first_message(UpdateVariantDTO, {"sku": "", "inventory_count": -1})
        assert message == "Inventory count must be >= 0"

    def test_blank_sku_rejected(self):
        assert _first_message(UpdateVariantDTO, {"sku": "   "}) == "SKU is required"

    def test_sku_trimmed(self):
        assert UpdateVariantDTO(sku=" B-2 ").sku == "B-2"

    def test_product_id_cannot_be_changed(self):
        with pytest.raises(ValidationError):
            UpdateVariantDTO.model_validate({"product_id": str(uuid.uuid4())})


# ===========================================================================
# ProductListQueryDTO
# ===========================================================================


class TestProductListQueryDTO:
    def test_blank_values_ignored(self):
        dto = ProductListQueryDTO.model_validate({"search": "", "category_id": " "})
        assert dto.filters() == {}

    def test_filters(self):
        category_id = uuid.uuid4()
        dto = ProductListQueryDTO.model_validate(
            {"search": "shirt", "category_id": str(category_id)}
        )
        assert dto.filters() == {"search": "shirt", "category_id": category_id}

    def test_unknown_params_ignored(self):
        dto = ProductListQueryDTO.model_validate({"page": "2"})
        assert dto.filters() == {}

    def test_invalid_category_id(self):
        message = _first_message(ProductListQueryDTO, {"category_id": "abc"})
        assert message.startswith("category_id:")


class TestColumnRange:
    def test_create_price_above_column_limit(self):
        message = _first_message(
            CreateProductDTO,
            {"name": "Shirt", "variants": [{"sku": "BIG", "price_cents": 10**20}]},
        )
        assert message == f"Price must be <= {MAX_COUNT}"

    def test_create_inventory_above_column_limit(self):
        message = _first_message(
            CreateProductDTO,
            {"name": "Shirt", "variants": [{"sku": "BIG", "inventory_count": MAX_COUNT + 1}]},
        )
        assert message == f"Inventory count must be <= {MAX_COUNT}"

    def test_limit_itself_accepted(self):
        dto = UpdateVariantDTO(price_cents=MAX_COUNT, inventory_count=MAX_COUNT)
        assert dto.changes() == {"price_cents": MAX_COUNT, "inventory_count": MAX_COUNT}

    def test_update_inventory_above_column_limit(self):
        message = _first_message(UpdateVariantDTO, {"inventory_count": 10**20})
        assert message == f"Inventory count must be <= {MAX_COUNT}"
