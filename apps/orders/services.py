import logging
from decimal import Decimal
from typing import List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone

from apps.inventory.services import InventoryService
from apps.payments.models import Payment, PaymentStatus
from apps.utils.exceptions import BusinessLogicException, first_error_message
from apps.utils.utils import generate_order_number, start_of_month, start_of_today

from .models import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    def get_order(order_id, lock: bool = False) -> Order:
        qs = Order.objects.select_for_update() if lock else Order.objects.all()
        try:
            return qs.get(pk=order_id)
        except (Order.DoesNotExist, DjangoValidationError):
            raise BusinessLogicException("Order not found", code="not_found")

    @staticmethod
    def _create_order_row(customer_id, payment_method: str, total: Decimal, user_id=None) -> Order:
        """
        Inserts the order header inside its own savepoint so a clash on
        order_number can be retried without losing the outer transaction.
        """
        max_attempts = settings.ORDER_NUMBER_MAX_ATTEMPTS
        attempt = 0
        while True:
            attempt += 1
            order_number = generate_order_number()
            try:
                with transaction.atomic():
                    return Order.objects.create(
                        order_number=order_number,
                        customer_id=customer_id,
                        user_id=user_id,
                        payment=payment_method,
                        total=total,
                        status=Order.Status.PROCESSING,
                    )
            except IntegrityError:
                if attempt >= max_attempts:
                    raise
                logger.warning(f"Order number collision on {order_number}, retrying ({attempt}/{max_attempts})")

    @staticmethod
    @transaction.atomic
    def create_order(customer_id, payment_method: str, items: List[dict], user_id=None) -> Order:
        """
        Places an order atomically:
        1. Order header (PROCESSING) with a unique order number
        2. Lock fruit rows in pk order
        3. Per line item, in submission order: conditional stock decrement
           ("out" history) + OrderItem with the caller's unit price
        4. One PENDING payment for the total

        Any failure rolls everything back.
        """
        total = sum((item["price"] * item["quantity"] for item in items), Decimal("0.00"))

        order = OrderService._create_order_row(customer_id, payment_method, total, user_id)

        fruits = InventoryService.lock_fruits(item["fruit_id"] for item in items)

        for item in items:
            fruit = fruits.get(str(item["fruit_id"]))
            if fruit is None:
                raise BusinessLogicException("Insufficient stock for fruit", code="insufficient_stock")

            qty = item["quantity"]
            InventoryService.decrement_stock(
                fruit.id, qty, f"Order {order.order_number}", user_id
            )
            OrderItem.objects.create(
                order=order,
                fruit=fruit,
                quantity=qty,
                price=item["price"],
                subtotal=item["price"] * qty,
            )

        Payment.objects.create(
            order=order,
            amount_paid=total,
            payment_status=PaymentStatus.PENDING,
            payment_method=payment_method,
            payment_date=timezone.now(),
        )

        logger.info(
            f"Order placed: {order.order_number} total={total}",
            extra={"order_id": order.id, "user_id": user_id},
        )
        return order

    @staticmethod
    @transaction.atomic
    def cancel_order(order_id, user_id=None) -> Order:
        """
        Compensating action for create_order: restores stock per line item,
        fails every payment and marks the order CANCELLED.
        """
        order = OrderService.get_order(order_id, lock=True)

        if order.status == Order.Status.CANCELLED:
            raise BusinessLogicException("Order is already cancelled", code="already_cancelled")
        if not order.can_cancel:
            raise BusinessLogicException(
                f"Cannot cancel an order with status {order.status}", code="invalid_transition"
            )

        for item in order.items.all():
            InventoryService.restore_stock(
                item.fruit_id,
                item.quantity,
                f"Order {order.order_number} cancelled",
                user_id,
            )

        order.payments.update(payment_status=PaymentStatus.FAILED, updated_at=timezone.now())

        order.status = Order.Status.CANCELLED
        order.save(update_fields=["status", "updated_at"])

        logger.info(f"Order cancelled: {order.order_number}", extra={"order_id": order.id, "user_id": user_id})
        return order

    @staticmethod
    @transaction.atomic
    def update_order_status(order_id, new_status: str, user_id=None) -> Order:
        if new_status not in Order.Status.values:
            raise BusinessLogicException(f"Invalid order status: {new_status}", code="invalid_status")

        order = OrderService.get_order(order_id, lock=True)
        if not order.can_transition_to(new_status):
            raise BusinessLogicException(
                f"Cannot change order status from {order.status} to {new_status}",
                code="invalid_transition",
            )

        if new_status == Order.Status.CANCELLED:
            return OrderService.cancel_order(order.id, user_id)

        order.status = new_status
        order.save(update_fields=["status", "updated_at"])
        logger.info(f"Order {order.order_number} moved to {new_status}", extra={"order_id": order.id})
        return order

    @staticmethod
    def get_order_summary() -> dict:
        today = start_of_today()
        month = start_of_month(today)

        def _totals(qs):
            agg = qs.aggregate(count=Count("id"), amount=Sum("total"))
            return agg["count"], agg["amount"] or Decimal("0.00")

        total_count, total_amount = _totals(Order.objects.all())
        today_count, today_amount = _totals(Order.objects.filter(created_at__gte=today))
        month_count, month_amount = _totals(Order.objects.filter(created_at__gte=month))

        breakdown = {
            row["status"]: row["count"]
            for row in Order.objects.values("status").annotate(count=Count("id")).order_by()
        }

        return {
            "total_count": total_count,
            "total_amount": total_amount,
            "today_count": today_count,
            "today_amount": today_amount,
            "this_month_count": month_count,
            "this_month_amount": month_amount,
            "status_breakdown": breakdown,
        }


# --- Boundary functions: never raise, always return a result dict ---

def create_order(data: dict) -> dict:
    """
    data: {customerId, payment, userId?, orderItems: [{fruitId, quantity, price}]}
    Returns {"success": True, "data": order} or {"error": message}.
    """
    from .serializers import CreateOrderSerializer

    serializer = CreateOrderSerializer(data=data)
    if not serializer.is_valid():
        return {"error": first_error_message(serializer.errors) or "Invalid order data"}

    try:
        order = OrderService.create_order(**serializer.service_kwargs())
    except BusinessLogicException as e:
        logger.info(f"Order rejected: {e.message}")
        return {"error": e.message}
    except Exception:
        logger.exception("Error creating order")
        return {"error": "Failed to create order"}

    return {"success": True, "data": order}


def cancel_order(order_id, user_id: Optional[str] = None) -> dict:
    try:
        order = OrderService.cancel_order(order_id, user_id)
    except BusinessLogicException as e:
        return {"error": e.message}
    except Exception:
        logger.exception(f"Error cancelling order {order_id}")
        return {"error": "Failed to cancel order"}

    return {"success": True, "data": order}
