"""Product and variant DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer.  DTOs are immutable (``frozen=True``) and reject unknown fields
(``extra="forbid"``), so a payload of the wrong shape fails before any
business rule runs.

Field order matters: Pydantic reports errors in declaration order, and the
API surfaces the first one, so fields are declared in the order the rules
must be checked.

- ``CreateVariantDTO`` / ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO`` / ``UpdateVariantDTO``: merge-patch inputs; ``None``
  means "leave unchanged".
- ``ProductListQueryDTO``: query-string filters of the listing.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.products.constants import (
    MAX_COUNT,
    PRODUCT_DEFAULTS,
    PRODUCT_STATUSES,
    VARIANT_DEFAULTS,
)


def _within_column_range(value: Optional[int], label: str) -> Optional[int]:
    if value is None:
        return value
    if value < 0:
        raise ValueError(f"{label} must be >= 0")
    if value > MAX_COUNT:
        raise ValueError(f"{label} must be <= {MAX_COUNT}")
    return value


def _valid_status(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in PRODUCT_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(PRODUCT_STATUSES)}")
    return value


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class CreateVariantDTO(BaseModel):
    """One variant of a product creation request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sku: Optional[str] = Field(default=None, validate_default=True)
    name: Optional[str] = None
    price_cents: Optional[int] = None
    inventory_count: Optional[int] = None

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Variant SKU is required")
        return v.strip()

    @field_validator("price_cents")
    @classmethod
    def price_within_range(cls, v: Optional[int]) -> Optional[int]:
        return _within_column_range(v, "Price")

    @field_validator("inventory_count")
    @classmethod
    def inventory_within_range(cls, v: Optional[int]) -> Optional[int]:
        return _within_column_range(v, "Inventory count")

    def with_defaults(self) -> CreateVariantDTO:
        """Return a copy where every unspecified field holds its default."""
        missing = {k: v for k, v in VARIANT_DEFAULTS.items() if getattr(self, k) is None}
        return self.model_copy(update=missing)


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates, in order:
    - ``name`` is present and not blank (trimmed).
    - ``variants`` contains at least one item.
    - every variant has a SKU, and price / inventory between 0 and ``MAX_COUNT``.
    - no SKU appears twice in the same request.

    Uniqueness against SKUs already stored is checked by the service.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = Field(default=None, validate_default=True)
    variants: Optional[List[CreateVariantDTO]] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    status: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Product name is required")
        return v.strip()

    @field_validator("variants")
    @classmethod
    def variants_must_not_be_empty(
        cls, v: Optional[List[CreateVariantDTO]]
    ) -> List[CreateVariantDTO]:
        if not v:
            raise ValueError("At least one variant is required")
        return v

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _valid_status(v)

    @model_validator(mode="after")
    def no_duplicate_skus(self):
        """Prevent the same SKU from appearing twice in one request."""
        seen = set()
        for variant in self.variants or []:
            if variant.sku in seen:
                raise ValueError(f"SKU '{variant.sku}' appears more than once")
            seen.add(variant.sku)
        return self

    def with_defaults(self) -> CreateProductDTO:
        """Apply product and variant defaults in one step before persistence."""
        missing = {k: v for k, v in PRODUCT_DEFAULTS.items() if getattr(self, k) is None}
        missing["variants"] = [variant.with_defaults() for variant in self.variants or []]
        return self.model_copy(update=missing)


# ---------------------------------------------------------------------------
# Update (merge-patch)
# ---------------------------------------------------------------------------


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    Variants are managed through their own endpoint.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    status: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Product name is required")
        return v.strip() if v is not None else None

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _valid_status(v)

    def changes(self) -> dict:
        """Fields the client supplied, keyed by model attribute name."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class UpdateVariantDTO(BaseModel):
    """Immutable DTO for variant update requests.

    The owning product cannot be changed, so ``product_id`` is not a field
    and is rejected like any other unknown key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = None
    price_cents: Optional[int] = None
    inventory_count: Optional[int] = None
    sku: Optional[str] = None

    @field_validator("price_cents")
    @classmethod
    def price_within_range(cls, v: Optional[int]) -> Optional[int]:
        return _within_column_range(v, "Price")

    @field_validator("inventory_count")
    @classmethod
    def inventory_within_range(cls, v: Optional[int]) -> Optional[int]:
        return _within_column_range(v, "Inventory count")

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("SKU is required")
        return v.strip() if v is not None else None

    def changes(self) -> dict:
        """Fields the client supplied."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class ProductListQueryDTO(BaseModel):
    """Query-string filters of ``GET /products``; blank values are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    search: Optional[str] = None
    category_id: Optional[UUID] = None

    @field_validator("search", "category_id", mode="before")
    @classmethod
    def blank_means_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def filters(self) -> dict:
        return {k: v for k, v in self.model_dump().items() if v is not None}
