from rest_framework import generics, views, status
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.catalog.serializers import FruitSerializer

from .models import StockHistory
from .serializers import StockHistorySerializer, StockAdjustmentSerializer
from .services import InventoryService


class StockHistoryListAPIView(generics.ListAPIView):
    """
    GET /api/v1/inventory/history/?fruit=<uuid>&movement_type=in|out
    """
    queryset = StockHistory.objects.select_related("fruit", "user").order_by("-created_at")
    serializer_class = StockHistorySerializer
    permission_classes = [IsAdmin]
    filterset_fields = ["fruit", "movement_type"]


class AdjustStockAPIView(views.APIView):
    """
    Manual override for admins.
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        fruit = InventoryService.adjust_stock(
            fruit_id=data["fruitId"],
            delta=data["quantity"],
            user_id=request.user.pk,
            description=data.get("description"),
        )
        return Response(FruitSerializer(fruit).data, status=status.HTTP_200_OK)
