from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.storefront.models import Product, Variant
from apps.storefront.services import VariantSelectionService
from .serializers import (
    ProductListSerializer,
    ProductDetailSerializer,
    ToggleRequestSerializer,
    DeselectRequestSerializer,
)
from .filters import ProductFilter


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Storefront API endpoint for products.

    list: List active products
    retrieve: Get product detail with variants
    variant_options: Attribute groups and availability for an empty selection
    select: Choose an attribute value
    deselect: Drop the value chosen for an attribute
    reset_selection: Start over
    """
    queryset = Product.objects.filter(is_active=True)
    lookup_field = 'slug'
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        return ProductDetailSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch(
                    'variants',
                    queryset=Variant.objects.prefetch_related(
                        'variantattribute_set__attribute_option__attribute_type'
                    )
                )
            )
        return queryset

    @action(detail=True, methods=['get'], url_path='variant-options')
    def variant_options(self, request, slug=None):
        """
        Get every attribute value of the product with its availability.
        Call once when the product page opens.
        """
        product = self.get_object()
        return Response(VariantSelectionService.get_variant_options(product))

    @action(detail=True, methods=['post'])
    def select(self, request, slug=None):
        """
        Choose a value for an attribute.

        Expected payload:
        {
            "selection": {"color": "Preto"},
            "attribute": "size",
            "value": "M"
        }
        """
        product = self.get_object()
        serializer = ToggleRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = VariantSelectionService.select(
            product, data['selection'], data['attribute'], data['value']
        )
        return Response(result)

    @action(detail=True, methods=['post'])
    def deselect(self, request, slug=None):
        """
        Drop the value chosen for an attribute.

        Expected payload:
        {
            "selection": {"color": "Preto", "size": "M"},
            "attribute": "size"
        }
        """
        product = self.get_object()
        serializer = DeselectRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = VariantSelectionService.deselect(
            product, data['selection'], data['attribute']
        )
        return Response(result)

    @action(detail=True, methods=['post'], url_path='reset-selection')
    def reset_selection(self, request, slug=None):
        """Clear the selection."""
        product = self.get_object()
        return Response(VariantSelectionService.reset(product))
