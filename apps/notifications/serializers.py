# apps/notifications/serializers.py
from rest_framework import serializers

from apps.orders.models import Order


class OrderNotificationSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    item_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "total",
            "status",
            "item_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
