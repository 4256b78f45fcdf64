"""Pin VariantSource: ORM rows -> engine Variants."""

from decimal import Decimal

import pytest

from apps.storefront.services import VariantSource
from apps.storefront.selection import SelectionStateMachine


@pytest.mark.django_db
class TestLoad:
    def test_loads_only_active_variants(self, shirt_product):
        variants = VariantSource.load(shirt_product)
        assert [v.sku for v in variants] == ['CAM-BRA-P', 'CAM-PRE-M', 'CAM-PRE-P']

    def test_inactive_variants_included_when_configured(self, shirt_product, settings):
        settings.STOREFRONT_SELECTION = {'ACTIVE_VARIANTS_ONLY': False}
        skus = [v.sku for v in VariantSource.load(shirt_product)]
        assert 'CAM-BRA-M' in skus

    def test_assignments_follow_attribute_type_order(self, shirt_product):
        variant = VariantSource.load(shirt_product)[0]
        assert [a.attribute for a in variant.assignments] == ['color', 'size']

    def test_maps_option_metadata(self, shirt_product):
        variant = next(v for v in VariantSource.load(shirt_product) if v.sku == 'CAM-PRE-P')
        color, size = variant.assignments
        assert color.value == 'Preto'
        assert color.hex_color == '#000000'
        assert color.kind == 'color'
        assert color.image_ref is None
        assert size.hex_color is None
        assert size.kind == 'text'

    def test_maps_stock_and_price(self, shirt_product):
        variant = next(v for v in VariantSource.load(shirt_product) if v.sku == 'CAM-PRE-M')
        assert variant.stock == 0
        assert variant.price == Decimal('79.90')
        assert variant.slug == 'cam-pre-m'


@pytest.mark.django_db
class TestEngineOverDatabase:
    def test_inactive_combination_is_not_offered(self, shirt_product):
        machine = SelectionStateMachine()
        machine.initialize(VariantSource.load(shirt_product))
        # Preto/M is sold out and Branco/M is inactive: M cannot be picked at all
        assert not machine.toggle('size', 'M').accepted

        branco = machine.resolver.resolve('color', 'Branco', {'size': 'M'})
        assert not branco.is_available
        assert list(branco.reasons) == [
            'not available in this combination',
            'not available with M size',
        ]
