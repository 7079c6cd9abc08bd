from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('fruit', 'quantity', 'price', 'subtotal')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'customer', 'payment', 'total', 'status', 'created_at')
    list_filter = ('status', 'payment', 'created_at')
    search_fields = ('order_number', 'customer__name', 'customer__email')
    readonly_fields = ('order_number', 'total', 'created_at', 'updated_at')
    inlines = [OrderItemInline]
