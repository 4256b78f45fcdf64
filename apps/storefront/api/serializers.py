from rest_framework import serializers
from apps.storefront.models import (
    Product,
    AttributeType,
    Variant,
)


# =============================================================================
# Attribute Serializers
# =============================================================================

class AttributeTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AttributeType
        fields = ['id', 'name', 'slug', 'datatype', 'display_order']


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists."""
    attributes = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'name', 'sell_price', 'stock_quantity',
            'is_in_stock', 'attributes'
        ]

    def get_attributes(self, obj):
        return obj.get_options_dict()


# =============================================================================
# Product Serializers
# =============================================================================

class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    active_variant_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'active_variant_count']


class ProductDetailSerializer(serializers.ModelSerializer):
    """Product detail with active variants and the attribute types they use."""
    variants = serializers.SerializerMethodField()
    attribute_types = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description',
            'variants', 'attribute_types',
            'created_at', 'updated_at'
        ]

    def get_variants(self, obj):
        variants = [v for v in obj.variants.all() if v.is_active]
        return VariantListSerializer(variants, many=True).data

    def get_attribute_types(self, obj):
        return AttributeTypeSerializer(obj.get_attribute_types(), many=True).data


# =============================================================================
# Selection Request Serializers
# =============================================================================

class SelectionStateSerializer(serializers.Serializer):
    """Selection held by the client: {attribute_slug: option_value}."""
    selection = serializers.DictField(
        child=serializers.CharField(max_length=100),
        default=dict
    )


class ToggleRequestSerializer(SelectionStateSerializer):
    attribute = serializers.CharField(max_length=100)
    value = serializers.CharField(max_length=100)


class DeselectRequestSerializer(SelectionStateSerializer):
    attribute = serializers.CharField(max_length=100)
