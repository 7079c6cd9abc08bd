from django.db import models
from django.conf import settings
from apps.utils.models import TimestampedModel
from apps.catalog.models import Fruit


class StockHistory(TimestampedModel):
    """
    Append-only audit trail of every stock movement.
    """
    class MovementType(models.TextChoices):
        IN = "in", "In"
        OUT = "out", "Out"

    fruit = models.ForeignKey(
        Fruit,
        on_delete=models.CASCADE,
        related_name="stock_history",
    )
    quantity = models.PositiveIntegerField()
    movement_type = models.CharField(max_length=10, choices=MovementType.choices)
    description = models.CharField(max_length=255, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "Stock history"
        indexes = [
            models.Index(fields=["fruit", "-created_at"], name="stock_hist_fruit_idx"),
        ]

    def __str__(self):
        return f"{self.movement_type} {self.quantity} x {self.fruit_id}"
