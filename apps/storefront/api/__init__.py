from .serializers import (
    AttributeTypeSerializer,
    VariantListSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    SelectionStateSerializer,
    ToggleRequestSerializer,
    DeselectRequestSerializer,
)

__all__ = [
    'AttributeTypeSerializer',
    'VariantListSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'SelectionStateSerializer',
    'ToggleRequestSerializer',
    'DeselectRequestSerializer',
]
