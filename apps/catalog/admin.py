# apps/catalog/admin.py
from django.contrib import admin
from .models import Fruit


@admin.register(Fruit)
class FruitAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "stock", "updated_at")
    search_fields = ("name",)
    list_filter = ("created_at",)
    readonly_fields = ("stock", "created_at", "updated_at")
