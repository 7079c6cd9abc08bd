from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.customers.models import Customer
from .models import Order
from .serializers import OrderSerializer, OrderStatusSerializer
from .services import OrderService, create_order, cancel_order


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Admins see every order; shoppers only the ones they placed.
    Create/cancel go through the service boundary functions and map
    their result dict onto HTTP.
    """
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = (
            Order.objects
            .select_related("customer", "user")
            .prefetch_related("items__fruit", "payments")
            .order_by("-created_at")
        )
        if self.request.user.is_admin:
            return qs
        return qs.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):
        data = request.data.copy()

        if not request.user.is_admin:
            # Shoppers always order as themselves, for their own customer profile
            data["userId"] = str(request.user.pk)
            own_customers = {
                str(pk) for pk in Customer.objects.filter(user=request.user).values_list("id", flat=True)
            }
            if str(data.get("customerId")) not in own_customers:
                raise PermissionDenied("You can only place orders for your own customer profile.")
        elif not data.get("userId"):
            data["userId"] = str(request.user.pk)

        result = create_order(data)
        if "error" in result:
            return Response({"error": result["error"]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(result["data"]).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        order = self.get_object()
        result = cancel_order(order.id, user_id=request.user.pk)
        if "error" in result:
            return Response({"error": result["error"]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(result["data"]).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="status", permission_classes=[IsAdmin])
    def set_status(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_order_status(
            pk, serializer.validated_data["status"], user_id=request.user.pk
        )
        return Response(self.get_serializer(order).data)

    @action(detail=False, methods=["get"], permission_classes=[IsAdmin])
    def summary(self, request):
        return Response(OrderService.get_order_summary())
