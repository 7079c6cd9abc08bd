# apps/analytics/views.py
from rest_framework import views
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.notifications.serializers import OrderNotificationSerializer
from .services import get_dashboard_stats


class DashboardView(views.APIView):
    """
    GET /api/v1/analytics/dashboard/
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        stats = get_dashboard_stats()
        stats["recent_orders"] = OrderNotificationSerializer(stats["recent_orders"], many=True).data
        return Response(stats)
