import django_filters
from django.db.models import Q

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    """Listing filters: free-text ``search`` over name/description and ``category_id``."""

    # The term is matched as sent; surrounding spaces are part of it.
    search = django_filters.CharFilter(method="filter_search", strip=False)
    category_id = django_filters.UUIDFilter(field_name="category_id")

    class Meta:
        model = Product
        fields = []

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(description__icontains=value)
        )
