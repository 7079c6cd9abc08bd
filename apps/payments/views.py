from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.orders.models import Order
from .models import Payment
from .serializers import (
    PaymentSerializer,
    PaymentListSerializer,
    PaymentProofSerializer,
    PaymentStatusSerializer,
)
from .services import PaymentService


class PaymentViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Admin payment list + confirmation. Shoppers may only upload a transfer proof.
    """
    queryset = Payment.objects.select_related("order", "order__customer").order_by("-payment_date")
    serializer_class = PaymentListSerializer
    permission_classes = [IsAdmin]

    @action(detail=False, methods=["post"], permission_classes=[IsAuthenticated])
    def proof(self, request):
        serializer = PaymentProofSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order_id = serializer.validated_data["orderId"]

        if not request.user.is_admin:
            owns_order = Order.objects.filter(pk=order_id, user=request.user).exists()
            if not owns_order:
                raise PermissionDenied("You can only attach proof to your own orders.")

        payment = PaymentService.attach_payment_proof(order_id, serializer.validated_data["proofUrl"])
        return Response(PaymentSerializer(payment).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = PaymentService.update_payment_status(pk, serializer.validated_data["status"])
        return Response(PaymentSerializer(payment).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(PaymentService.get_payment_stats())
