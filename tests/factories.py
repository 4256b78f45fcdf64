from decimal import Decimal

from apps.storefront.selection import ValueDescriptor, Variant


def make_variant(pk, sku, stock, price='10.00', **attributes):
    """Build an engine Variant from attribute=value keyword pairs."""
    return Variant(
        id=pk,
        sku=sku,
        stock=stock,
        price=Decimal(price),
        assignments=tuple(
            ValueDescriptor(attribute=attribute, value=value)
            for attribute, value in attributes.items()
        ),
    )
