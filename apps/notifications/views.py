# apps/notifications/views.py
from rest_framework import status, views
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from .serializers import OrderNotificationSerializer
from .services import get_order_notifications, mark_notification_as_read


class NotificationListView(views.APIView):
    """
    GET /api/v1/notifications/
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        data = get_order_notifications()
        return Response({
            "notifications": OrderNotificationSerializer(data["notifications"], many=True).data,
            "unread_count": data["unread_count"],
        })


class NotificationMarkReadView(views.APIView):
    """
    POST /api/v1/notifications/<order_id>/read/
    """
    permission_classes = [IsAdmin]

    def post(self, request, pk):
        mark_notification_as_read(pk)
        return Response({"success": True}, status=status.HTTP_200_OK)
