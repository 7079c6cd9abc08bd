from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.catalog.models import Fruit
from apps.utils.exceptions import BusinessLogicException
from .models import StockHistory
from .services import InventoryService


class InventoryServiceTests(TestCase):

    def setUp(self):
        self.fruit = Fruit.objects.create(name="Mango", price=Decimal("15.00"), stock=5)

    def test_decrement_reduces_stock_and_logs_out(self):
        InventoryService.decrement_stock(self.fruit.id, 3, "Order ORD-1")

        self.fruit.refresh_from_db()
        self.assertEqual(self.fruit.stock, 2)
        entry = StockHistory.objects.get(fruit=self.fruit)
        self.assertEqual(entry.movement_type, StockHistory.MovementType.OUT)
        self.assertEqual(entry.quantity, 3)
        self.assertEqual(entry.description, "Order ORD-1")

    def test_decrement_beyond_stock_is_rejected(self):
        with self.assertRaises(BusinessLogicException) as ctx:
            InventoryService.decrement_stock(self.fruit.id, 6)

        self.assertEqual(ctx.exception.message, "Insufficient stock for Mango")
        self.assertEqual(ctx.exception.code, "insufficient_stock")
        self.fruit.refresh_from_db()
        self.assertEqual(self.fruit.stock, 5)
        self.assertFalse(StockHistory.objects.exists())

    def test_decrement_unknown_fruit(self):
        with self.assertRaises(BusinessLogicException) as ctx:
            InventoryService.decrement_stock("00000000-0000-0000-0000-000000000000", 1)
        self.assertEqual(ctx.exception.message, "Insufficient stock for fruit")

    def test_decrement_to_exactly_zero(self):
        InventoryService.decrement_stock(self.fruit.id, 5)
        self.fruit.refresh_from_db()
        self.assertEqual(self.fruit.stock, 0)

    def test_restore_increments_and_logs_in(self):
        InventoryService.restore_stock(self.fruit.id, 4, "Order ORD-1 cancelled")

        self.fruit.refresh_from_db()
        self.assertEqual(self.fruit.stock, 9)
        entry = StockHistory.objects.get(fruit=self.fruit)
        self.assertEqual(entry.movement_type, StockHistory.MovementType.IN)
        self.assertEqual(entry.description, "Order ORD-1 cancelled")

    def test_adjust_rejects_zero(self):
        with self.assertRaises(BusinessLogicException):
            InventoryService.adjust_stock(self.fruit.id, 0)

    def test_adjust_negative_cannot_oversell(self):
        with self.assertRaises(BusinessLogicException):
            InventoryService.adjust_stock(self.fruit.id, -10)
        self.fruit.refresh_from_db()
        self.assertEqual(self.fruit.stock, 5)


class InventoryApiTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="secret123", name="Shopper"
        )
        self.fruit = Fruit.objects.create(name="Grape", price=Decimal("7.00"), stock=2)

    def test_adjust_endpoint_restocks(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/v1/inventory/adjust/", {
            "fruitId": str(self.fruit.id),
            "quantity": 8,
            "description": "Supplier delivery",
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["stock"], 10)
        entry = StockHistory.objects.get(fruit=self.fruit)
        self.assertEqual(entry.user, self.admin)
        self.assertEqual(entry.description, "Supplier delivery")

    def test_adjust_endpoint_insufficient_stock(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/v1/inventory/adjust/", {
            "fruitId": str(self.fruit.id),
            "quantity": -3,
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "Insufficient stock for Grape")

    def test_history_is_admin_only(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.get("/api/v1/inventory/history/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_history_filter_by_fruit(self):
        other = Fruit.objects.create(name="Lime", price=Decimal("1.00"), stock=1)
        InventoryService.restore_stock(self.fruit.id, 1, "restock")
        InventoryService.restore_stock(other.id, 1, "restock")

        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/inventory/history/", {"fruit": str(self.fruit.id)})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual(resp.data["results"][0]["fruit_name"], "Grape")

    def test_history_filter_rejects_malformed_fruit_id(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/inventory/history/", {"fruit": "not-a-uuid"})

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("fruit", resp.data)

    def test_history_filter_by_movement_type(self):
        InventoryService.restore_stock(self.fruit.id, 2, "restock")

        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/inventory/history/", {"movement_type": "out"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 0)
