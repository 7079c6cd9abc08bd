# apps/notifications/tests.py
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.catalog.models import Fruit
from apps.customers.models import Customer
from apps.orders.models import Order
from apps.orders.services import OrderService, create_order
from apps.utils.exceptions import BusinessLogicException
from .services import get_order_notifications, mark_notification_as_read


class OrderNotificationTests(TestCase):

    def setUp(self):
        self.customer = Customer.objects.create(name="Putri")
        self.fruit = Fruit.objects.create(name="Sawo", price=Decimal("3.00"), stock=100)

    def _order(self):
        return create_order({
            "customerId": str(self.customer.id),
            "payment": "CASH",
            "orderItems": [{"fruitId": str(self.fruit.id), "quantity": 1, "price": "3.00"}],
        })["data"]

    def test_recent_processing_orders_are_listed(self):
        first = self._order()
        second = self._order()
        OrderService.update_order_status(second.id, Order.Status.COMPLETED)

        data = get_order_notifications()

        self.assertEqual([o.id for o in data["notifications"]], [first.id])
        self.assertEqual(data["notifications"][0].item_count, 1)
        self.assertEqual(data["unread_count"], 1)

    def test_old_orders_drop_out_of_the_window(self):
        order = self._order()
        old = timezone.now() - timedelta(hours=30)
        Order.objects.filter(pk=order.pk).update(created_at=old, updated_at=old)

        data = get_order_notifications()
        self.assertEqual(data["notifications"], [])
        self.assertEqual(data["unread_count"], 0)

    def test_touching_an_old_order_brings_it_back(self):
        order = self._order()
        old = timezone.now() - timedelta(hours=30)
        Order.objects.filter(pk=order.pk).update(created_at=old, updated_at=old)

        mark_notification_as_read(order.id)

        data = get_order_notifications()
        self.assertEqual(len(data["notifications"]), 1)
        self.assertEqual(data["unread_count"], 0)

    def test_at_most_ten(self):
        for _ in range(12):
            self._order()
        data = get_order_notifications()
        self.assertEqual(len(data["notifications"]), 10)
        self.assertEqual(data["unread_count"], 12)

    def test_mark_missing_order(self):
        with self.assertRaises(BusinessLogicException):
            mark_notification_as_read("00000000-0000-0000-0000-000000000004")


class NotificationApiTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="secret123", name="Shopper"
        )

    def test_admin_only(self):
        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.get("/api/v1/notifications/").status_code, 403)

        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/notifications/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["unread_count"], 0)

    def test_read_unknown_order_is_404(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/v1/notifications/00000000-0000-0000-0000-000000000005/read/")
        self.assertEqual(resp.status_code, 404)
