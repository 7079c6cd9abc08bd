from rest_framework import serializers

from apps.utils.validators import validate_phone
from .models import Customer


def _validate_optional_phone(value):
    if value:
        validate_phone(value)
    return value


class CustomerSerializer(serializers.ModelSerializer):
    order_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "user",
            "order_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "user", "created_at", "updated_at"]
        extra_kwargs = {
            "name": {"error_messages": {"blank": "Customer name is required"}},
            # Uniqueness is checked by CustomerService so it maps to a 409
            "email": {"validators": [], "error_messages": {"invalid": "Invalid email format"}},
            "phone": {"validators": [_validate_optional_phone]},
        }


class CustomerDetailSerializer(CustomerSerializer):
    stats = serializers.SerializerMethodField()
    favourite_fruits = serializers.SerializerMethodField()
    orders = serializers.SerializerMethodField()

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ["stats", "favourite_fruits", "orders"]

    # Limit on embedded orders; None means all of them
    recent_orders_limit = None

    def get_stats(self, obj):
        from .services import CustomerService
        return CustomerService.get_customer_stats(obj)

    def get_favourite_fruits(self, obj):
        from .services import CustomerService
        return CustomerService.get_favourite_fruits(obj)

    def get_orders(self, obj):
        from apps.orders.serializers import OrderSerializer

        qs = obj.orders.prefetch_related("items__fruit", "payments").order_by("-created_at")
        if self.recent_orders_limit is not None:
            qs = qs[:self.recent_orders_limit]
        return OrderSerializer(qs, many=True).data


class CustomerProfileSerializer(CustomerDetailSerializer):
    """
    The shopper's own record: last 5 orders only.
    """
    recent_orders_limit = 5
    favourite_fruits = None

    class Meta(CustomerDetailSerializer.Meta):
        fields = [f for f in CustomerDetailSerializer.Meta.fields if f != "favourite_fruits"]
