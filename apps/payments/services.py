import logging
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum

from apps.utils.exceptions import BusinessLogicException
from apps.utils.utils import start_of_today
from .models import Payment, PaymentStatus

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service to handle Payment Lifecycle after checkout.
    The PENDING payment itself is opened by OrderService.create_order.
    """

    @staticmethod
    def latest_for_order(order_id) -> Payment:
        try:
            payment = (
                Payment.objects
                .filter(order_id=order_id)
                .order_by("-created_at")
                .first()
            )
        except DjangoValidationError:
            payment = None

        if payment is None:
            raise BusinessLogicException("Payment not found", code="not_found")
        return payment

    @staticmethod
    @transaction.atomic
    def attach_payment_proof(order_id, proof_url: str) -> Payment:
        payment = PaymentService.latest_for_order(order_id)
        if payment.payment_status != PaymentStatus.PENDING:
            raise BusinessLogicException(
                f"Cannot attach proof to a payment with status {payment.payment_status}",
                code="invalid_transition",
            )
        payment.proof_url = proof_url
        payment.save(update_fields=["proof_url", "updated_at"])

        logger.info(f"Payment proof attached to {payment.id}", extra={"order_id": order_id})
        return payment

    @staticmethod
    @transaction.atomic
    def update_payment_status(payment_id, new_status: str) -> Payment:
        """
        Admin confirmation. Only PENDING payments move, and only to COMPLETED or FAILED.
        """
        try:
            payment = Payment.objects.select_for_update().get(pk=payment_id)
        except (Payment.DoesNotExist, DjangoValidationError):
            raise BusinessLogicException("Payment not found", code="not_found")

        allowed = {PaymentStatus.COMPLETED, PaymentStatus.FAILED}
        if payment.payment_status != PaymentStatus.PENDING or new_status not in allowed:
            raise BusinessLogicException(
                f"Cannot change payment status from {payment.payment_status} to {new_status}",
                code="invalid_transition",
            )

        payment.payment_status = new_status
        payment.save(update_fields=["payment_status", "updated_at"])
        logger.info(f"Payment {payment.id} marked {new_status}", extra={"order_id": payment.order_id})
        return payment

    @staticmethod
    def get_payment_stats() -> dict:
        today = start_of_today()
        agg = Payment.objects.aggregate(
            total_count=Count("id"),
            total_amount=Sum("amount_paid"),
            today_count=Count("id", filter=Q(payment_date__gte=today)),
            today_amount=Sum("amount_paid", filter=Q(payment_date__gte=today)),
            pending_count=Count("id", filter=Q(payment_status=PaymentStatus.PENDING)),
            pending_amount=Sum("amount_paid", filter=Q(payment_status=PaymentStatus.PENDING)),
            completed_count=Count("id", filter=Q(payment_status=PaymentStatus.COMPLETED)),
        )

        total = agg["total_count"]
        success_rate = round(agg["completed_count"] * 100 / total, 2) if total else 0

        return {
            "total_count": total,
            "total_amount": agg["total_amount"] or Decimal("0.00"),
            "today_count": agg["today_count"],
            "today_amount": agg["today_amount"] or Decimal("0.00"),
            "pending_count": agg["pending_count"],
            "pending_amount": agg["pending_amount"] or Decimal("0.00"),
            "success_rate": success_rate,
        }
