from django.db.models import Exists, OuterRef
from django_filters import rest_framework as filters
from apps.storefront.models import Product, Variant


class ProductFilter(filters.FilterSet):
    """Filter for storefront products."""

    in_stock = filters.BooleanFilter(method='filter_in_stock')

    # Attribute filters
    attribute = filters.CharFilter(method='filter_by_attribute')

    class Meta:
        model = Product
        fields = ['slug']

    def filter_in_stock(self, queryset, name, value):
        # Both conditions must hold for the same variant row.
        purchasable = Exists(
            Variant.objects.filter(
                product=OuterRef('pk'),
                is_active=True,
                stock_quantity__gt=0,
            )
        )
        if value is True:
            return queryset.filter(purchasable)
        elif value is False:
            return queryset.exclude(purchasable)
        return queryset

    def filter_by_attribute(self, queryset, name, value):
        """
        Filter by attribute in format: attribute_slug:option_value
        Example: ?attribute=color:Preto
        """
        if ':' not in value:
            return queryset

        attr_slug, option_value = value.split(':', 1)
        return queryset.filter(
            variants__is_active=True,
            variants__variantattribute__attribute_option__attribute_type__slug=attr_slug,
            variants__variantattribute__attribute_option__value=option_value,
        ).distinct()
