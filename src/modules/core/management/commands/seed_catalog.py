from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.categories.repositories import CategoryDjangoRepository
from modules.products.dtos import CreateProductDTO
from modules.products.exceptions import SkuAlreadyExists
from modules.products.repositories import ProductDjangoRepository, VariantDjangoRepository
from modules.products.services import ProductService

CATEGORIES = ["Apparel", "Footwear", "Accessories"]

# (name, description, category, status, [(sku, variant name, price_cents, inventory)])
CATALOG = [
    (
        "Classic Cotton Shirt",
        "Breathable everyday shirt",
        "Apparel",
        "active",
        [
            ("SHIRT-CL-S", "Small", 2499, 40),
            ("SHIRT-CL-M", "Medium", 2499, 55),
            ("SHIRT-CL-L", "Large", 2699, 30),
        ],
    ),
    (
        "Linen Summer Shirt",
        "Lightweight linen, relaxed fit",
        "Apparel",
        "draft",
        [("SHIRT-LN-M", "Medium", 3999, 12)],
    ),
    (
        "Trail Runner",
        "Grippy outsole for mixed terrain",
        "Footwear",
        "active",
        [
            ("SHOE-TR-42", "EU 42", 8999, 8),
            ("SHOE-TR-43", "EU 43", 8999, 5),
        ],
    ),
    (
        "Leather Belt",
        None,
        "Accessories",
        "archived",
        [("BELT-LTH", "Default", 1999, 0)],
    ),
]


class Command(BaseCommand):
    help = "Seed the catalog with sample categories, products and variants."

    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog...")

        category_repo = CategoryDjangoRepository()
        categories = {name: category_repo.get_or_create(name) for name in CATEGORIES}

        service = ProductService(
            product_repository=ProductDjangoRepository(),
            variant_repository=VariantDjangoRepository(),
            category_repository=category_repo,
        )

        created = skipped = 0
        for name, description, category, status, variants in CATALOG:
            dto = CreateProductDTO(
                name=name,
                description=description,
                category_id=categories[category].id,
                status=status,
                variants=[
                    {
                        "sku": sku,
                        "name": variant_name,
                        "price_cents": price_cents,
                        "inventory_count": inventory,
                    }
                    for sku, variant_name, price_cents, inventory in variants
                ],
            )
            try:
                service.create_product(dto)
                created += 1
            except SkuAlreadyExists:
                skipped += 1

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"products_created={created}, "
                f"products_skipped={skipped}"
            )
        )
