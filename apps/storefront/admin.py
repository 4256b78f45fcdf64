from django.contrib import admin
from django.utils.html import format_html
from adminsortable2.admin import SortableAdminMixin, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Product,
    AttributeType,
    AttributeOption,
    Variant,
    VariantAttribute,
)


# =============================================================================
# Inlines
# =============================================================================

class AttributeOptionInline(SortableInlineAdminMixin, admin.TabularInline):
    model = AttributeOption
    extra = 1
    fields = ['product', 'value', 'display_value', 'color_hex', 'image', 'display_order']
    autocomplete_fields = ['product']


class VariantAttributeInline(admin.TabularInline):
    model = VariantAttribute
    extra = 1
    autocomplete_fields = ['attribute_option']


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'name', 'sell_price', 'stock_quantity', 'is_active']
    readonly_fields = ['sku', 'name']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ['name', 'slug', 'variant_count', 'active_variant_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'slug', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'active_variant_count', 'created_at', 'updated_at']
    inlines = [VariantInline]


@admin.register(AttributeType)
class AttributeTypeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'slug', 'datatype', 'option_count', 'display_order']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [AttributeOptionInline]

    def option_count(self, obj):
        return obj.options.count()
    option_count.short_description = 'Opções'


@admin.register(AttributeOption)
class AttributeOptionAdmin(admin.ModelAdmin):
    list_display = ['value', 'display_value', 'attribute_type', 'product', 'color_swatch', 'image_preview', 'display_order']
    list_filter = ['attribute_type', 'product']
    list_editable = ['display_order']
    search_fields = ['value', 'display_value', 'attribute_type__name', 'product__name']
    autocomplete_fields = ['attribute_type', 'product']

    def color_swatch(self, obj):
        if obj.color_hex:
            return format_html(
                '<div style="width: 20px; height: 20px; background-color: {}; '
                'border: 1px solid #ccc; border-radius: 3px;"></div>',
                obj.color_hex
            )
        return '-'
    color_swatch.short_description = 'Cor'

    def image_preview(self, obj):
        if obj.image:
            return format_html(
                '<img src="{}" style="max-height: 40px; max-width: 60px;" />',
                obj.thumbnail_small.url
            )
        return '-'
    image_preview.short_description = 'Imagem'


@admin.register(Variant)
class VariantAdmin(SimpleHistoryAdmin):
    list_display = ['sku', 'name', 'product', 'sell_price', 'stock_quantity', 'stock_status', 'is_active']
    list_filter = ['product', 'is_active']
    list_editable = ['sell_price', 'stock_quantity', 'is_active']
    search_fields = ['sku', 'name', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = ['created_at', 'updated_at', 'is_in_stock']
    inlines = [VariantAttributeInline]
    list_per_page = 50

    actions = ['activate_variants', 'deactivate_variants', 'mark_out_of_stock']

    def stock_status(self, obj):
        if obj.stock_quantity <= 0:
            return format_html('<span style="color: {};">{}</span>', 'red', 'Sem estoque')
        return format_html('<span style="color: {};">{}</span>', 'green', 'Em estoque')
    stock_status.short_description = 'Status Estoque'

    @admin.action(description='Ativar variantes selecionadas')
    def activate_variants(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'{count} variantes ativadas.')

    @admin.action(description='Desativar variantes selecionadas')
    def deactivate_variants(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'{count} variantes desativadas.')

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(stock_quantity=0)
        self.message_user(request, f'{count} variantes atualizadas.')


admin.site.site_header = 'Loja Admin'
admin.site.site_title = 'Loja'
admin.site.index_title = 'Painel de Administração'
