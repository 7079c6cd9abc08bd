# apps/catalog/tests.py
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from apps.accounts.models import User, Role
from apps.inventory.models import StockHistory
from apps.utils.exceptions import BusinessLogicException
from .models import Fruit
from .services import FruitService


class FruitModelTests(TestCase):
    def test_stock_cannot_go_negative_at_db_level(self):
        fruit = Fruit.objects.create(name="Apple", price=Decimal("10.00"), stock=1)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Fruit.objects.filter(pk=fruit.pk).update(stock=-1)

    def test_price_must_be_positive_at_db_level(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Fruit.objects.create(name="Free Mango", price=Decimal("0"), stock=1)


class FruitServiceTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )

    def test_create_with_stock_writes_initial_history(self):
        fruit = FruitService.create_fruit(
            {"name": "Apple", "price": Decimal("12.50"), "stock": 20}, user_id=self.admin.pk
        )
        entry = StockHistory.objects.get(fruit=fruit)
        self.assertEqual(entry.quantity, 20)
        self.assertEqual(entry.movement_type, "in")
        self.assertEqual(entry.user, self.admin)

    def test_update_stock_goes_through_ledger(self):
        fruit = Fruit.objects.create(name="Pear", price=Decimal("5.00"), stock=10)

        FruitService.update_fruit(fruit.id, {"stock": 4}, user_id=self.admin.pk)

        fruit.refresh_from_db()
        self.assertEqual(fruit.stock, 4)
        entry = StockHistory.objects.get(fruit=fruit)
        self.assertEqual(entry.movement_type, "out")
        self.assertEqual(entry.quantity, 6)

    def test_update_missing_fruit(self):
        with self.assertRaises(BusinessLogicException) as ctx:
            FruitService.update_fruit("00000000-0000-0000-0000-000000000000", {"name": "x"})
        self.assertEqual(ctx.exception.code, "not_found")

    def test_stats(self):
        Fruit.objects.create(name="A", price=Decimal("10.00"), stock=0)
        Fruit.objects.create(name="B", price=Decimal("20.00"), stock=5)
        Fruit.objects.create(name="C", price=Decimal("30.00"), stock=50)

        stats = FruitService.get_fruit_stats()

        self.assertEqual(stats["total_fruits"], 3)
        self.assertEqual(stats["in_stock"], 2)
        self.assertEqual(stats["low_stock"], 1)
        self.assertEqual(stats["out_of_stock"], 1)
        self.assertEqual(stats["total_stock"], 55)
        self.assertEqual(stats["average_price"], Decimal("20.00"))


class FruitViewSetTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="secret123", name="Shopper"
        )
        self.apple = Fruit.objects.create(name="Apple", price=Decimal("10.00"), stock=3)
        self.kiwi = Fruit.objects.create(name="Kiwi", price=Decimal("4.00"), stock=0)

    def test_public_can_list_fruits(self):
        resp = self.client.get(reverse("fruit-list"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        names = [item["name"] for item in resp.data["results"]]
        self.assertIn("Apple", names)
        self.assertIn("Kiwi", names)

    def test_in_stock_excludes_empty_fruits(self):
        resp = self.client.get(reverse("fruit-in-stock"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        names = [item["name"] for item in resp.data]
        self.assertEqual(names, ["Apple"])

    def test_detail_includes_recent_history(self):
        for _ in range(12):
            StockHistory.objects.create(fruit=self.apple, quantity=1, movement_type="in")

        resp = self.client.get(reverse("fruit-detail", kwargs={"pk": self.apple.pk}))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data["stock_history"]), 10)

    def test_non_admin_cannot_create(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.post(reverse("fruit-list"), {"name": "Melon", "price": "9.00", "stock": 2})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_create(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(reverse("fruit-list"), {"name": "Melon", "price": "9.00", "stock": 2})
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["stock"], 2)
        self.assertTrue(Fruit.objects.filter(name="Melon").exists())

    def test_create_rejects_non_positive_price(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(reverse("fruit-list"), {"name": "Melon", "price": "0", "stock": 2})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_negative_stock(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(reverse("fruit-list"), {"name": "Melon", "price": "3.00", "stock": -1})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_can_delete_unordered_fruit(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.delete(reverse("fruit-detail", kwargs={"pk": self.kiwi.pk}))
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Fruit.objects.filter(pk=self.kiwi.pk).exists())

    def test_stats_is_admin_only(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.get(reverse("fruit-stats"))
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        resp = self.client.get(reverse("fruit-stats"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["total_fruits"], 2)
