import logging
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce, TruncMonth

from apps.utils.exceptions import BusinessLogicException, DuplicateResourceException
from apps.utils.utils import start_of_month, start_of_previous_month

from .models import Customer

logger = logging.getLogger(__name__)


class CustomerService:

    @staticmethod
    def get_customer(customer_id) -> Customer:
        try:
            return Customer.objects.get(pk=customer_id)
        except (Customer.DoesNotExist, DjangoValidationError):
            raise BusinessLogicException("Customer not found", code="not_found")

    @staticmethod
    def _ensure_email_free(email, exclude_id=None):
        if not email:
            return
        qs = Customer.objects.filter(email__iexact=email)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        if qs.exists():
            raise DuplicateResourceException("Customer with this email already exists")

    @staticmethod
    @transaction.atomic
    def create_customer(data: dict, user_id=None) -> Customer:
        email = data.get("email") or None
        CustomerService._ensure_email_free(email)

        customer = Customer.objects.create(
            name=data["name"],
            email=email,
            phone=data.get("phone", ""),
            address=data.get("address", ""),
            user_id=user_id,
        )
        logger.info(f"Customer created: {customer.id}")
        return customer

    @staticmethod
    @transaction.atomic
    def update_customer(customer_id, data: dict) -> Customer:
        customer = CustomerService.get_customer(customer_id)

        if "email" in data:
            data["email"] = data["email"] or None
            CustomerService._ensure_email_free(data["email"], exclude_id=customer.id)

        for field in ("name", "email", "phone", "address"):
            if field in data:
                setattr(customer, field, data[field])
        customer.save()
        return customer

    @staticmethod
    @transaction.atomic
    def delete_customer(customer_id):
        customer = CustomerService.get_customer(customer_id)
        if customer.orders.exists():
            raise BusinessLogicException("Cannot delete customer with existing orders", code="in_use")

        customer.delete()
        logger.info(f"Customer deleted: {customer_id}")

    @staticmethod
    def get_customer_stats(customer: Customer) -> dict:
        """
        Spending stats over COMPLETED orders only.
        """
        from apps.orders.models import Order

        agg = customer.orders.filter(status=Order.Status.COMPLETED).aggregate(
            total_spent=Sum("total"),
            total_orders=Count("id"),
        )
        total_spent = agg["total_spent"] or Decimal("0.00")
        total_orders = agg["total_orders"]
        average = (total_spent / total_orders).quantize(Decimal("0.01")) if total_orders else Decimal("0.00")

        return {
            "total_spent": total_spent,
            "total_orders": total_orders,
            "average_order_value": average,
        }

    @staticmethod
    def get_favourite_fruits(customer: Customer, limit: int = 5) -> list:
        from apps.orders.models import Order, OrderItem

        rows = (
            OrderItem.objects
            .filter(order__customer=customer, order__status=Order.Status.COMPLETED)
            .values("fruit_id", "fruit__name", "fruit__image")
            .annotate(total_quantity=Sum("quantity"))
            .order_by("-total_quantity")[:limit]
        )
        return [
            {
                "fruit": row["fruit_id"],
                "name": row["fruit__name"],
                "image": row["fruit__image"],
                "total_quantity": row["total_quantity"],
            }
            for row in rows
        ]

    @staticmethod
    @transaction.atomic
    def create_profile(user, data: dict) -> Customer:
        """
        Self-service: a shopper links exactly one customer record to their account.
        """
        if Customer.objects.filter(user=user).exists():
            raise DuplicateResourceException("Customer profile already exists")

        payload = {
            "name": data.get("name") or user.name or user.email,
            "email": data.get("email") or user.email,
            "phone": data.get("phone", ""),
            "address": data.get("address", ""),
        }
        return CustomerService.create_customer(payload, user_id=user.pk)

    @staticmethod
    def get_current_user_customer(user) -> Customer:
        customer = Customer.objects.filter(user=user).order_by("created_at").first()
        if customer is None:
            raise BusinessLogicException("Customer profile not found", code="not_found")
        return customer

    @staticmethod
    def get_customer_summary() -> dict:
        this_month = start_of_month()
        last_month = start_of_previous_month()

        total = Customer.objects.count()
        new_this_month = Customer.objects.filter(created_at__gte=this_month).count()
        new_last_month = Customer.objects.filter(
            created_at__gte=last_month, created_at__lt=this_month
        ).count()
        active = Customer.objects.filter(orders__created_at__gte=this_month).distinct().count()

        growth = 0
        if new_last_month > 0:
            growth = round((new_this_month - new_last_month) / new_last_month * 100, 2)

        return {
            "total_customers": total,
            "new_customers_this_month": new_this_month,
            "active_customers": active,
            "growth_percentage": growth,
        }

    @staticmethod
    def get_customer_analytics(top_limit: int = 10, months: int = 6) -> dict:
        """
        Admin customer-stats widget: top spenders over COMPLETED orders and
        new customers per month for the current month and the ones before it.
        """
        from apps.orders.models import Order

        completed = Q(orders__status=Order.Status.COMPLETED)
        top_customers = (
            Customer.objects
            .annotate(
                total_spent=Coalesce(
                    Sum("orders__total", filter=completed),
                    Value(Decimal("0.00")),
                    output_field=DecimalField(max_digits=12, decimal_places=2),
                ),
                order_count=Count("orders", filter=completed),
            )
            .order_by("-total_spent", "name")
            .values("id", "name", "email", "total_spent", "order_count")[:top_limit]
        )

        since = start_of_month()
        for _ in range(months - 1):
            since = start_of_previous_month(since)

        growth = (
            Customer.objects
            .filter(created_at__gte=since)
            .annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(count=Count("id"))
            .order_by("month")
        )

        return {
            "total_customers": Customer.objects.count(),
            "new_customers_this_month": Customer.objects.filter(created_at__gte=start_of_month()).count(),
            "top_customers": list(top_customers),
            "customer_growth": list(growth),
        }
