from rest_framework import serializers

from apps.accounts.models import User
from apps.customers.models import Customer
from apps.payments.serializers import PaymentSerializer
from apps.utils.validators import validate_positive_amount
from .models import Order, OrderItem


class OrderItemInputSerializer(serializers.Serializer):
    fruitId = serializers.UUIDField()
    quantity = serializers.IntegerField(
        min_value=1,
        error_messages={"min_value": "Quantity must be at least 1"},
    )
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, validators=[validate_positive_amount]
    )


class CreateOrderSerializer(serializers.Serializer):
    """
    Checkout payload. Validated before the order transaction is opened.
    """
    customerId = serializers.UUIDField()
    payment = serializers.ChoiceField(
        choices=Order.PaymentMethod.choices,
        error_messages={"invalid_choice": "Invalid payment method"},
    )
    userId = serializers.UUIDField(required=False, allow_null=True)
    orderItems = OrderItemInputSerializer(
        many=True,
        allow_empty=False,
        error_messages={"empty": "Order must contain at least one item"},
    )

    def validate_customerId(self, value):
        if not Customer.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Customer not found")
        return value

    def validate_userId(self, value):
        if value is not None and not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User not found")
        return value

    def service_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "customer_id": data["customerId"],
            "payment_method": data["payment"],
            "user_id": data.get("userId"),
            "items": [
                {"fruit_id": i["fruitId"], "quantity": i["quantity"], "price": i["price"]}
                for i in data["orderItems"]
            ],
        }


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)


class OrderItemSerializer(serializers.ModelSerializer):
    fruit_name = serializers.CharField(source='fruit.name', read_only=True)
    fruit_image = serializers.CharField(source='fruit.image', read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'fruit', 'fruit_name', 'fruit_image', 'quantity', 'price', 'subtotal']


class OrderCustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ['id', 'name', 'email', 'phone']


class OrderSerializer(serializers.ModelSerializer):
    customer = OrderCustomerSerializer(read_only=True)
    user_name = serializers.CharField(source='user.name', read_only=True, default=None)
    items = OrderItemSerializer(many=True, read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'customer', 'user', 'user_name', 'payment',
            'total', 'status', 'status_display', 'items', 'payments',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields
