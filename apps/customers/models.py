# apps/customers/models.py
from django.db import models
from django.conf import settings

from apps.utils.models import TimestampedModel


class Customer(TimestampedModel):
    """
    The buyer an order is placed for. Admins can create customers without an
    account; shoppers get one linked to their user via the profile endpoint.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True, null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="customer_name_idx"),
        ]

    def __str__(self):
        return self.name
