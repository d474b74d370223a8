from django.contrib import admin
from django.utils.html import format_html
from apps.catalog.models import Category, Product, ProductPlan


class ProductPlanInline(admin.TabularInline):
    """Inline admin for product plans."""
    model = ProductPlan
    extra = 1
    fields = ['name', 'price', 'guarantee', 'maintenance']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'product_count', 'created_at']
    search_fields = ['name']
    ordering = ['name']

    def product_count(self, obj):
        return obj.products.filter(is_active=True).count()
    product_count.short_description = 'Active products'


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Products."""

    list_display = [
        'name',
        'vendor',
        'price',
        'stock_badge',
        'is_active',
        'created_at'
    ]
    list_filter = ['is_active', 'categories', 'vendor', 'created_at']
    search_fields = ['name', 'vendor', 'description', 'serial_no', 'slug']
    readonly_fields = [
        'name_normalized',
        'vendor_normalized',
        'created_at',
        'updated_at'
    ]
    filter_horizontal = ['categories']
    inlines = [ProductPlanInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'vendor', 'serial_no', 'categories')
        }),
        ('Pricing & Stock', {
            'fields': ('price', 'quantity')
        }),
        ('Description', {
            'fields': ('description', 'image')
        }),
        ('Normalized Fields (Auto-generated)', {
            'fields': ('name_normalized', 'vendor_normalized'),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('is_active', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['deactivate_products', 'activate_products']

    def stock_badge(self, obj):
        color = '#28a745' if obj.in_stock else '#dc3545'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            color,
            obj.quantity
        )
    stock_badge.short_description = 'Stock'
    stock_badge.admin_order_field = 'quantity'

    def deactivate_products(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f"Deactivated {count} products")
    deactivate_products.short_description = "Deactivate selected products"

    def activate_products(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f"Activated {count} products")
    activate_products.short_description = "Activate selected products"


@admin.register(ProductPlan)
class ProductPlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'product', 'price', 'guarantee', 'maintenance']
    list_filter = ['guarantee', 'maintenance']
    search_fields = ['name', 'product__name', 'product__vendor']
    raw_id_fields = ['product']
