from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'order', 'amount_paid', 'payment_method', 'payment_status', 'payment_date')
    list_filter = ('payment_status', 'payment_method')
    search_fields = ('order__order_number',)
    readonly_fields = ('order', 'amount_paid', 'payment_method', 'created_at', 'updated_at')
