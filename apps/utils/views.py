# apps/utils/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from django.conf import settings


class ServerInfoView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "app_name": settings.PROJECT_NAME,
            "version": "1.0.0",
            "debug": settings.DEBUG,
        })


class GlobalConfigView(APIView):
    """
    Storefront settings the frontend needs (payment methods, stock thresholds).
    """
    permission_classes = [AllowAny]

    def get(self, request):
        from apps.orders.models import Order

        return Response({
            "payment_methods": [choice for choice, _ in Order.PaymentMethod.choices],
            "low_stock_threshold": settings.LOW_STOCK_THRESHOLD,
            "currency": settings.STORE_CURRENCY,
        })
