from rest_framework import serializers
from .models import Payment, PaymentStatus


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "amount_paid",
            "payment_status",
            "payment_method",
            "payment_date",
            "proof_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PaymentListSerializer(PaymentSerializer):
    order = serializers.UUIDField(source="order_id", read_only=True)
    order_number = serializers.CharField(source="order.order_number", read_only=True)
    customer_name = serializers.CharField(source="order.customer.name", read_only=True)

    class Meta(PaymentSerializer.Meta):
        fields = ["order", "order_number", "customer_name"] + PaymentSerializer.Meta.fields
        read_only_fields = fields


class PaymentProofSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    proofUrl = serializers.URLField(max_length=500)


class PaymentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[PaymentStatus.COMPLETED, PaymentStatus.FAILED],
        error_messages={"invalid_choice": "Payment status must be COMPLETED or FAILED"},
    )
