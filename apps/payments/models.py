from django.db import models
from django.utils import timezone
from apps.orders.models import Order
from apps.utils.models import TimestampedModel


class PaymentStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    COMPLETED = "COMPLETED", "Completed"
    FAILED = "FAILED", "Failed"


class Payment(TimestampedModel):
    """
    Money record for an order. One PENDING payment is opened when the order
    is placed; admins confirm it (COMPLETED) and cancellation marks it FAILED.
    """
    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="payments")

    amount_paid = models.DecimalField(max_digits=12, decimal_places=2)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    payment_method = models.CharField(max_length=20, choices=Order.PaymentMethod.choices)
    payment_date = models.DateTimeField(default=timezone.now)

    # Transfer receipt / screenshot uploaded by the shopper
    proof_url = models.URLField(max_length=500, blank=True, default="")

    class Meta:
        ordering = ["-payment_date"]
        indexes = [
            models.Index(fields=["order", "-created_at"], name="payment_order_created_idx"),
        ]

    def __str__(self):
        return f"Payment {self.id} - {self.payment_status}"
