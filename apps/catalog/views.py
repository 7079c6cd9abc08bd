from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin, IsAdminOrReadOnly
from .models import Fruit
from .serializers import FruitSerializer, FruitDetailSerializer
from .services import FruitService


class FruitViewSet(viewsets.ModelViewSet):
    """
    Public fruit list/detail; writes are admin-only and go through FruitService.
    """
    queryset = Fruit.objects.all().order_by("-created_at")
    serializer_class = FruitSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_serializer_class(self):
        if self.action == "retrieve":
            return FruitDetailSerializer
        return FruitSerializer

    def perform_create(self, serializer):
        serializer.instance = FruitService.create_fruit(
            serializer.validated_data, user_id=self.request.user.pk
        )

    def perform_update(self, serializer):
        serializer.instance = FruitService.update_fruit(
            serializer.instance.id, serializer.validated_data, user_id=self.request.user.pk
        )

    def perform_destroy(self, instance):
        FruitService.delete_fruit(instance.id)

    @action(detail=False, methods=["get"], url_path="in-stock", permission_classes=[AllowAny])
    def in_stock(self, request):
        serializer = FruitSerializer(FruitService.in_stock(), many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"], permission_classes=[IsAdmin])
    def stats(self, request):
        return Response(FruitService.get_fruit_stats(), status=status.HTTP_200_OK)
