# apps/catalog/models.py
from django.db import models
from django.db.models import Q

from apps.utils.models import TimestampedModel


class Fruit(TimestampedModel):
    """
    Sellable product. `stock` is the live inventory ledger for the fruit:
    only InventoryService (and the admin forms that go through it) may move it.
    """
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock = models.IntegerField(default=0)
    image = models.URLField(max_length=500, blank=True, default="")

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="fruit_name_idx"),
            models.Index(fields=["stock"], name="fruit_stock_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(stock__gte=0),
                name="fruit_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(price__gt=0),
                name="fruit_price_positive",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def in_stock(self):
        return self.stock > 0
