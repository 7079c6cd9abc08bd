from django.db import models
from apps.utils.models import TimestampedModel
from apps.catalog.models import Fruit
from .order import Order


class OrderItem(TimestampedModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    fruit = models.ForeignKey(Fruit, on_delete=models.PROTECT, related_name='order_items')

    quantity = models.PositiveIntegerField()
    # Snapshot of the unit price at order time; never re-read from the fruit
    price = models.DecimalField(max_digits=12, decimal_places=2)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity}x {self.fruit_id}"
