# apps/analytics/services.py
import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum

from apps.catalog.models import Fruit
from apps.customers.models import Customer
from apps.orders.models import Order

logger = logging.getLogger(__name__)


def get_dashboard_stats(recent_limit: int = 5) -> dict:
    """
    Headline numbers for the admin dashboard.
    Revenue only counts COMPLETED orders; "pending" means still PROCESSING.
    """
    order_agg = Order.objects.aggregate(
        total_orders=Count("id"),
        revenue=Sum("total", filter=Q(status=Order.Status.COMPLETED)),
        pending_orders=Count("id", filter=Q(status=Order.Status.PROCESSING)),
    )

    recent_orders = list(
        Order.objects
        .select_related("customer")
        .order_by("-created_at")[:recent_limit]
    )

    return {
        "total_orders": order_agg["total_orders"],
        "total_customers": Customer.objects.count(),
        "revenue": order_agg["revenue"] or Decimal("0.00"),
        "pending_orders": order_agg["pending_orders"],
        "total_fruits": Fruit.objects.count(),
        "recent_orders": recent_orders,
    }
