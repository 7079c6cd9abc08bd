from rest_framework import serializers
from .models import StockHistory


class StockHistorySerializer(serializers.ModelSerializer):
    fruit_name = serializers.CharField(source="fruit.name", read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True, default=None)

    class Meta:
        model = StockHistory
        fields = [
            "id",
            "fruit",
            "fruit_name",
            "quantity",
            "movement_type",
            "description",
            "user",
            "user_email",
            "created_at",
        ]
        read_only_fields = fields


class StockAdjustmentSerializer(serializers.Serializer):
    fruitId = serializers.UUIDField()
    quantity = serializers.IntegerField(help_text="Positive to restock, negative to write off")
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_quantity(self, value):
        if value == 0:
            raise serializers.ValidationError("Adjustment quantity must not be zero")
        return value
