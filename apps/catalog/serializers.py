# apps/catalog/serializers.py
from rest_framework import serializers

from apps.utils.validators import validate_positive_amount
from .models import Fruit


class FruitSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, validators=[validate_positive_amount]
    )
    stock = serializers.IntegerField(
        min_value=0, required=False,
        error_messages={"min_value": "Stock cannot be negative"},
    )

    class Meta:
        model = Fruit
        fields = ["id", "name", "price", "stock", "image", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "name": {"error_messages": {"blank": "Name is required"}},
        }


class FruitDetailSerializer(FruitSerializer):
    stock_history = serializers.SerializerMethodField()

    class Meta(FruitSerializer.Meta):
        fields = FruitSerializer.Meta.fields + ["stock_history"]

    def get_stock_history(self, obj):
        from apps.inventory.serializers import StockHistorySerializer

        recent = obj.stock_history.select_related("user").order_by("-created_at")[:10]
        return StockHistorySerializer(recent, many=True).data
