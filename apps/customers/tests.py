from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.catalog.models import Fruit
from apps.orders.models import Order
from apps.orders.services import OrderService, create_order
from apps.utils.exceptions import BusinessLogicException, DuplicateResourceException
from apps.utils.utils import start_of_month
from .models import Customer
from .services import CustomerService


def place(customer, fruit, qty, price, complete=False):
    order = create_order({
        "customerId": str(customer.id),
        "payment": "CASH",
        "orderItems": [{"fruitId": str(fruit.id), "quantity": qty, "price": str(price)}],
    })["data"]
    if complete:
        order = OrderService.update_order_status(order.id, Order.Status.COMPLETED)
    return order


class CustomerServiceTests(TestCase):

    def setUp(self):
        self.customer = CustomerService.create_customer({"name": "Intan", "email": "intan@example.com"})

    def test_duplicate_email_rejected(self):
        with self.assertRaises(DuplicateResourceException) as ctx:
            CustomerService.create_customer({"name": "Other", "email": "INTAN@example.com"})
        self.assertEqual(ctx.exception.message, "Customer with this email already exists")

    def test_blank_email_is_stored_as_null(self):
        a = CustomerService.create_customer({"name": "A", "email": ""})
        b = CustomerService.create_customer({"name": "B"})
        self.assertIsNone(a.email)
        self.assertIsNone(b.email)

    def test_update_keeps_own_email(self):
        customer = CustomerService.update_customer(
            self.customer.id, {"name": "Intan P", "email": "intan@example.com"}
        )
        self.assertEqual(customer.name, "Intan P")

    def test_update_to_taken_email(self):
        CustomerService.create_customer({"name": "Joko", "email": "joko@example.com"})
        with self.assertRaises(DuplicateResourceException):
            CustomerService.update_customer(self.customer.id, {"email": "joko@example.com"})

    def test_delete_blocked_by_orders(self):
        fruit = Fruit.objects.create(name="Apel", price=Decimal("5.00"), stock=10)
        place(self.customer, fruit, 1, 5)

        with self.assertRaises(BusinessLogicException) as ctx:
            CustomerService.delete_customer(self.customer.id)
        self.assertEqual(ctx.exception.message, "Cannot delete customer with existing orders")

    def test_stats_only_count_completed_orders(self):
        apel = Fruit.objects.create(name="Apel", price=Decimal("5.00"), stock=50)
        kiwi = Fruit.objects.create(name="Kiwi", price=Decimal("8.00"), stock=50)
        place(self.customer, apel, 4, 5, complete=True)
        place(self.customer, kiwi, 1, 8, complete=True)
        place(self.customer, kiwi, 10, 8)

        stats = CustomerService.get_customer_stats(self.customer)
        self.assertEqual(stats["total_spent"], Decimal("28.00"))
        self.assertEqual(stats["total_orders"], 2)
        self.assertEqual(stats["average_order_value"], Decimal("14.00"))

        favourites = CustomerService.get_favourite_fruits(self.customer)
        self.assertEqual([f["name"] for f in favourites], ["Apel", "Kiwi"])
        self.assertEqual(favourites[0]["total_quantity"], 4)

    def test_profile_is_created_once(self):
        user = User.objects.create_user(email="lina@example.com", password="secret123", name="Lina")

        customer = CustomerService.create_profile(user, {"phone": "+628123456789"})
        self.assertEqual(customer.user, user)
        self.assertEqual(customer.email, "lina@example.com")
        self.assertEqual(customer.name, "Lina")

        with self.assertRaises(DuplicateResourceException) as ctx:
            CustomerService.create_profile(user, {})
        self.assertEqual(ctx.exception.message, "Customer profile already exists")

    def test_summary(self):
        CustomerService.create_customer({"name": "Made"})
        summary = CustomerService.get_customer_summary()

        self.assertEqual(summary["total_customers"], 2)
        self.assertEqual(summary["new_customers_this_month"], 2)
        self.assertEqual(summary["active_customers"], 0)
        self.assertEqual(summary["growth_percentage"], 0)

    def test_analytics_ranks_completed_spend_and_groups_signups_by_month(self):
        made = CustomerService.create_customer({"name": "Made"})
        old = CustomerService.create_customer({"name": "Lama"})
        Customer.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=240))

        salak = Fruit.objects.create(name="Salak", price=Decimal("10.00"), stock=50)
        place(self.customer, salak, 2, 10, complete=True)
        place(made, salak, 3, 10, complete=True)
        place(made, salak, 1, 10)

        analytics = CustomerService.get_customer_analytics()

        top = analytics["top_customers"]
        self.assertEqual([row["name"] for row in top], ["Made", "Intan", "Lama"])
        self.assertEqual(top[0]["total_spent"], Decimal("30.00"))
        self.assertEqual(top[0]["order_count"], 1)
        self.assertEqual(top[2]["total_spent"], Decimal("0.00"))
        self.assertEqual(top[2]["order_count"], 0)

        self.assertEqual(analytics["total_customers"], 3)
        self.assertEqual(analytics["new_customers_this_month"], 2)
        growth = analytics["customer_growth"]
        self.assertEqual(len(growth), 1)
        self.assertEqual(growth[0]["month"], start_of_month())
        self.assertEqual(growth[0]["count"], 2)


class CustomerApiTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="secret123", name="Shopper"
        )

    def test_admin_crud(self):
        self.client.force_authenticate(self.admin)

        resp = self.client.post("/api/v1/customers/", {"name": "Nina", "email": "nina@example.com"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        customer_id = resp.data["id"]

        resp = self.client.patch(f"/api/v1/customers/{customer_id}/", {"phone": "+6281111111"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["phone"], "+6281111111")

        resp = self.client.get(f"/api/v1/customers/{customer_id}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("stats", resp.data)
        self.assertEqual(resp.data["favourite_fruits"], [])

        resp = self.client.delete(f"/api/v1/customers/{customer_id}/")
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)

    def test_duplicate_email_is_conflict(self):
        Customer.objects.create(name="Nina", email="nina@example.com")
        self.client.force_authenticate(self.admin)

        resp = self.client.post("/api/v1/customers/", {"name": "Nina 2", "email": "nina@example.com"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"], "Customer with this email already exists")

    def test_invalid_phone(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/v1/customers/", {"name": "Oki", "phone": "abc"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_shopper_cannot_list_customers(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.get("/api/v1/customers/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_me_flow(self):
        self.client.force_authenticate(self.shopper)

        resp = self.client.get("/api/v1/customers/me/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

        resp = self.client.post("/api/v1/customers/me/", {"address": "Jl. Mangga 1"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["name"], "Shopper")

        resp = self.client.get("/api/v1/customers/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["address"], "Jl. Mangga 1")
        self.assertNotIn("favourite_fruits", resp.data)

        resp = self.client.post("/api/v1/customers/me/", {}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)

    def test_summary_endpoint(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/customers/summary/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["total_customers"], 0)

    def test_analytics_endpoint_is_admin_only(self):
        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.get("/api/v1/customers/analytics/").status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/customers/analytics/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["top_customers"], [])
        self.assertEqual(resp.data["customer_growth"], [])
