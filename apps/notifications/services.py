# apps/notifications/services.py
import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from apps.orders.models import Order
from apps.utils.exceptions import BusinessLogicException

logger = logging.getLogger(__name__)


def _window_start():
    return timezone.now() - timedelta(hours=settings.NOTIFICATION_WINDOW_HOURS)


def get_order_notifications(limit: int = 10) -> dict:
    """
    Admin bell: PROCESSING orders created or touched inside the window.
    There is no separate notification table; the order itself is the
    notification and `updated_at` doubles as the "seen" marker.
    """
    since = _window_start()
    recent = Q(created_at__gte=since) | Q(updated_at__gte=since)

    notifications = list(
        Order.objects
        .filter(recent, status=Order.Status.PROCESSING)
        .select_related("customer")
        .annotate(item_count=Count("items"))
        .order_by("-created_at")[:limit]
    )
    unread_count = Order.objects.filter(
        status=Order.Status.PROCESSING, created_at__gte=since
    ).count()

    return {"notifications": notifications, "unread_count": unread_count}


def mark_notification_as_read(order_id) -> Order:
    updated = Order.objects.filter(pk=order_id).update(updated_at=timezone.now())
    if not updated:
        raise BusinessLogicException("Order not found", code="not_found")

    logger.debug("Notification for order %s marked as read", order_id)
    return Order.objects.get(pk=order_id)
