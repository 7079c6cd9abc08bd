from django.db import models
from django.conf import settings
from apps.utils.models import TimestampedModel
from apps.customers.models import Customer


class Order(TimestampedModel):
    class Status(models.TextChoices):
        PROCESSING = "PROCESSING", "Processing"
        COMPLETED = "COMPLETED", "Completed"
        CANCELLED = "CANCELLED", "Cancelled"

    class PaymentMethod(models.TextChoices):
        CASH = "CASH", "Cash"
        TRANSFER = "TRANSFER", "Bank Transfer"
        CREDIT_CARD = "CREDIT_CARD", "Credit Card"
        DIGITAL_WALLET = "DIGITAL_WALLET", "Digital Wallet"

    # Allowed moves; anything not listed here is rejected.
    TRANSITIONS = {
        Status.PROCESSING: {Status.COMPLETED, Status.CANCELLED},
    }

    order_number = models.CharField(max_length=50, unique=True, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='orders')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
    )

    payment = models.CharField(max_length=20, choices=PaymentMethod.choices)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PROCESSING, db_index=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='order_status_created_idx'),
            models.Index(fields=['customer', '-created_at'], name='order_customer_created_idx'),
        ]

    def __str__(self):
        return f"{self.order_number} [{self.status}]"

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS.get(self.status, set())

    @property
    def can_cancel(self):
        return self.can_transition_to(self.Status.CANCELLED)
