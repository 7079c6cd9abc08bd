# apps/analytics/tests.py
from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.catalog.models import Fruit
from apps.customers.models import Customer
from apps.orders.models import Order
from apps.orders.services import OrderService, create_order, cancel_order
from .services import get_dashboard_stats


class DashboardStatsTests(TestCase):

    def setUp(self):
        customer = Customer.objects.create(name="Rudi")
        fruit = Fruit.objects.create(name="Markisa", price=Decimal("10.00"), stock=100)
        Fruit.objects.create(name="Belimbing", price=Decimal("6.00"), stock=0)

        def place(qty):
            return create_order({
                "customerId": str(customer.id),
                "payment": "DIGITAL_WALLET",
                "orderItems": [{"fruitId": str(fruit.id), "quantity": qty, "price": "10.00"}],
            })["data"]

        done = place(3)
        OrderService.update_order_status(done.id, Order.Status.COMPLETED)
        place(1)
        cancelled = place(2)
        cancel_order(cancelled.id)

    def test_headline_numbers(self):
        stats = get_dashboard_stats()

        self.assertEqual(stats["total_orders"], 3)
        self.assertEqual(stats["total_customers"], 1)
        self.assertEqual(stats["revenue"], Decimal("30.00"))
        self.assertEqual(stats["pending_orders"], 1)
        self.assertEqual(stats["total_fruits"], 2)
        self.assertEqual(len(stats["recent_orders"]), 3)

    def test_dashboard_endpoint_is_admin_only(self):
        client = APIClient()
        shopper = User.objects.create_user(email="s@example.com", password="secret123", name="S")
        admin = User.objects.create_user(
            email="a@example.com", password="secret123", name="A", role=Role.ADMIN
        )

        client.force_authenticate(shopper)
        self.assertEqual(client.get("/api/v1/analytics/dashboard/").status_code, 403)

        client.force_authenticate(admin)
        resp = client.get("/api/v1/analytics/dashboard/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["total_orders"], 3)
        self.assertEqual(len(resp.data["recent_orders"]), 3)
