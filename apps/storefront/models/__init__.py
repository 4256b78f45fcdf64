"""
Storefront models backing variant selection.

Model Hierarchy:
- Product: Base product (e.g., "Camiseta Básica")
- AttributeType: Attribute axes (Color, Size, Length)
- AttributeOption: Values for each attribute type, per product (Preto, M, 230m)
- Variant: Individual SKU with price and stock
"""

from .product import Product
from .attribute import AttributeType, AttributeOption
from .variant import Variant, VariantAttribute

__all__ = [
    'Product',
    'AttributeType',
    'AttributeOption',
    'Variant',
    'VariantAttribute',
]
