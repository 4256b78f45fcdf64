"""
Loads a product's variants from the database into selection engine values.
"""

import logging
from typing import List

from django.db.models import Prefetch

from apps.storefront.conf import selection_setting
from apps.storefront.models import Product, Variant, VariantAttribute
from apps.storefront.selection import ValueDescriptor
from apps.storefront.selection import Variant as EngineVariant

logger = logging.getLogger(__name__)


class VariantSource:
    """
    Bridges the ORM and the selection engine.
    The engine never touches the database; everything it needs is read here, once per request.
    """

    @staticmethod
    def get_variant_queryset(product: Product):
        queryset = Variant.objects.filter(product=product)
        if selection_setting('ACTIVE_VARIANTS_ONLY'):
            queryset = queryset.filter(is_active=True)

        return queryset.prefetch_related(
            Prefetch(
                'variantattribute_set',
                queryset=VariantAttribute.objects.select_related(
                    'attribute_option__attribute_type'
                ).order_by(
                    'attribute_option__attribute_type__display_order',
                    'attribute_option__attribute_type__name',
                )
            )
        ).order_by('sku')

    @staticmethod
    def to_descriptor(option) -> ValueDescriptor:
        """
        Convert an AttributeOption into a ValueDescriptor.

        Attribute type slugs are the attribute names; color attributes keep
        their hex so the storefront can render swatches.
        """
        attr_type = option.attribute_type
        return ValueDescriptor(
            attribute=attr_type.slug,
            value=option.value,
            hex_color=option.color_hex or None,
            image_ref=option.image_url,
            kind='color' if attr_type.datatype == 'color' else 'text',
            display_value=option.get_display_value(),
        )

    @staticmethod
    def to_engine_variant(variant: Variant) -> EngineVariant:
        return EngineVariant(
            id=variant.pk,
            sku=variant.sku,
            slug=variant.sku.lower(),
            stock=variant.stock_quantity,
            price=variant.sell_price,
            assignments=tuple(
                VariantSource.to_descriptor(va.attribute_option)
                for va in variant.variantattribute_set.all()
            ),
        )

    @staticmethod
    def load(product: Product) -> List[EngineVariant]:
        """
        Fetch all variants of a product as engine Variants.

        Args:
            product: The product whose variants are offered

        Returns:
            List of engine Variants ordered by SKU
        """
        variants = [
            VariantSource.to_engine_variant(variant)
            for variant in VariantSource.get_variant_queryset(product)
        ]
        logger.debug("Loaded %d variants for product %s", len(variants), product.slug)
        return variants
