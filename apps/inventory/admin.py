from django.contrib import admin
from .models import StockHistory


@admin.register(StockHistory)
class StockHistoryAdmin(admin.ModelAdmin):
    list_display = ('fruit', 'movement_type', 'quantity', 'description', 'user', 'created_at')
    list_filter = ('movement_type', 'created_at')
    search_fields = ('fruit__name', 'description')
    readonly_fields = [f.name for f in StockHistory._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
