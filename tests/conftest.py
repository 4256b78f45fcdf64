"""Shared fixtures for the storefront test suite.

Engine fixtures are plain values (no database). ORM fixtures build a small
T-shirt product: color (Black, White) x size (S, M).
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from apps.storefront.selection import (
    SelectionStateMachine,
    ValueDescriptor,
    Variant,
    VariantCatalog,
)
from tests.factories import make_variant


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def shirt_variants():
    """Black/S in stock, Black/M sold out, White/S in stock. No White/M."""
    return [
        make_variant(1, 'TS-BLK-S', 5, color='Black', size='S'),
        make_variant(2, 'TS-BLK-M', 0, color='Black', size='M'),
        make_variant(3, 'TS-WHT-S', 3, color='White', size='S'),
    ]


@pytest.fixture
def shirt_catalog(shirt_variants):
    return VariantCatalog(shirt_variants)


@pytest.fixture
def image_notifier():
    return MagicMock()


@pytest.fixture
def machine(shirt_variants, image_notifier):
    machine = SelectionStateMachine(on_image_change=image_notifier)
    machine.initialize(shirt_variants)
    return machine


@pytest.fixture
def swatch_variants():
    """Variants whose color options carry hex swatches and images."""
    black = ValueDescriptor('color', 'Black', hex_color='#000000', image_ref='img/black.jpg', kind='color')
    red = ValueDescriptor('color', 'Red', hex_color='#FF0000', image_ref='img/red.jpg', kind='color')
    small = ValueDescriptor('size', 'S')
    large = ValueDescriptor('size', 'L')
    return [
        Variant(id=10, sku='SW-BLK-S', stock=2, price=Decimal('20.00'), assignments=(black, small)),
        Variant(id=11, sku='SW-BLK-L', stock=1, price=Decimal('22.00'), assignments=(black, large)),
        Variant(id=12, sku='SW-RED-S', stock=4, price=Decimal('20.00'), assignments=(red, small)),
    ]


# =============================================================================
# ORM FIXTURES
# =============================================================================

@pytest.fixture
def attribute_types(db):
    from apps.storefront.models import AttributeType
    color = AttributeType.objects.create(name='Cor', slug='color', datatype='color', display_order=1)
    size = AttributeType.objects.create(name='Tamanho', slug='size', datatype='text', display_order=2)
    return {'color': color, 'size': size}


@pytest.fixture
def shirt_product(db, attribute_types):
    """Product with Preto/P (5), Preto/M (0), Branco/P (3) and an inactive Branco/M."""
    from apps.storefront.models import AttributeOption, Product, Variant as VariantModel, VariantAttribute

    product = Product.objects.create(name='Camiseta Básica', slug='camiseta-basica')

    color, size = attribute_types['color'], attribute_types['size']
    preto = AttributeOption.objects.create(
        attribute_type=color, product=product, value='Preto', color_hex='#000000', display_order=0
    )
    branco = AttributeOption.objects.create(
        attribute_type=color, product=product, value='Branco', color_hex='#FFFFFF', display_order=1
    )
    p = AttributeOption.objects.create(attribute_type=size, product=product, value='P', display_order=0)
    m = AttributeOption.objects.create(attribute_type=size, product=product, value='M', display_order=1)

    rows = [
        ('CAM-PRE-P', 5, True, preto, p),
        ('CAM-PRE-M', 0, True, preto, m),
        ('CAM-BRA-P', 3, True, branco, p),
        ('CAM-BRA-M', 7, False, branco, m),
    ]
    for sku, stock, active, color_opt, size_opt in rows:
        variant = VariantModel.objects.create(
            product=product,
            sku=sku,
            sell_price=Decimal('79.90'),
            stock_quantity=stock,
            is_active=active,
        )
        VariantAttribute.objects.create(variant=variant, attribute_option=size_opt)
        VariantAttribute.objects.create(variant=variant, attribute_option=color_opt)

    return product


@pytest.fixture
def mug_product(db):
    """Nothing purchasable: the active variant is sold out, the stocked one is inactive."""
    from apps.storefront.models import Product, Variant as VariantModel

    product = Product.objects.create(name='Caneca', slug='caneca')
    VariantModel.objects.create(
        product=product, sku='CAN-1', sell_price=Decimal('39.90'), stock_quantity=0, is_active=True
    )
    VariantModel.objects.create(
        product=product, sku='CAN-2', sell_price=Decimal('39.90'), stock_quantity=9, is_active=False
    )
    return product
