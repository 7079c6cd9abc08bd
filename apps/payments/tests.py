from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.catalog.models import Fruit
from apps.customers.models import Customer
from apps.orders.services import cancel_order, create_order
from apps.utils.exceptions import BusinessLogicException
from .models import Payment, PaymentStatus
from .services import PaymentService


class PaymentServiceTests(TestCase):

    def setUp(self):
        self.customer = Customer.objects.create(name="Hana")
        self.fruit = Fruit.objects.create(name="Nangka", price=Decimal("50.00"), stock=10)
        self.order = create_order({
            "customerId": str(self.customer.id),
            "payment": "TRANSFER",
            "orderItems": [{"fruitId": str(self.fruit.id), "quantity": 2, "price": "50.00"}],
        })["data"]
        self.payment = self.order.payments.get()

    def test_attach_proof_to_latest_payment(self):
        payment = PaymentService.attach_payment_proof(self.order.id, "https://cdn.example.com/proof.jpg")

        self.assertEqual(payment.id, self.payment.id)
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.proof_url, "https://cdn.example.com/proof.jpg")
        self.assertEqual(self.payment.payment_status, PaymentStatus.PENDING)

    def test_attach_proof_missing_order(self):
        with self.assertRaises(BusinessLogicException) as ctx:
            PaymentService.attach_payment_proof("00000000-0000-0000-0000-000000000009", "https://x.example.com/a.png")
        self.assertEqual(ctx.exception.message, "Payment not found")

    def test_attach_proof_rejected_after_cancel(self):
        cancel_order(self.order.id)

        with self.assertRaises(BusinessLogicException) as ctx:
            PaymentService.attach_payment_proof(self.order.id, "https://cdn.example.com/late.jpg")

        self.assertEqual(ctx.exception.code, "invalid_transition")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payment_status, PaymentStatus.FAILED)
        self.assertEqual(self.payment.proof_url, "")

    def test_confirm_pending_payment(self):
        payment = PaymentService.update_payment_status(self.payment.id, PaymentStatus.COMPLETED)
        self.assertEqual(payment.payment_status, PaymentStatus.COMPLETED)

    def test_settled_payment_cannot_change(self):
        PaymentService.update_payment_status(self.payment.id, PaymentStatus.FAILED)

        with self.assertRaises(BusinessLogicException) as ctx:
            PaymentService.update_payment_status(self.payment.id, PaymentStatus.COMPLETED)
        self.assertEqual(ctx.exception.code, "invalid_transition")

    def test_stats(self):
        Payment.objects.create(
            order=self.order,
            amount_paid=Decimal("40.00"),
            payment_status=PaymentStatus.COMPLETED,
            payment_method="CASH",
        )

        stats = PaymentService.get_payment_stats()

        self.assertEqual(stats["total_count"], 2)
        self.assertEqual(stats["total_amount"], Decimal("140.00"))
        self.assertEqual(stats["today_count"], 2)
        self.assertEqual(stats["pending_count"], 1)
        self.assertEqual(stats["pending_amount"], Decimal("100.00"))
        self.assertEqual(stats["success_rate"], 50.0)


class PaymentApiTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret123", name="Admin", role=Role.ADMIN
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="secret123", name="Shopper"
        )
        self.stranger = User.objects.create_user(
            email="stranger@example.com", password="secret123", name="Stranger"
        )
        customer = Customer.objects.create(name="Shopper", user=self.shopper)
        fruit = Fruit.objects.create(name="Sirsak", price=Decimal("12.00"), stock=4)
        self.order = create_order({
            "customerId": str(customer.id),
            "payment": "TRANSFER",
            "userId": str(self.shopper.id),
            "orderItems": [{"fruitId": str(fruit.id), "quantity": 1, "price": "12.00"}],
        })["data"]

    def test_list_is_admin_only(self):
        self.client.force_authenticate(self.shopper)
        self.assertEqual(self.client.get("/api/v1/payments/").status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/payments/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["results"][0]["order_number"], self.order.order_number)

    def test_owner_uploads_proof(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.post("/api/v1/payments/proof/", {
            "orderId": str(self.order.id),
            "proofUrl": "https://cdn.example.com/receipt.png",
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["proof_url"], "https://cdn.example.com/receipt.png")

    def test_stranger_cannot_upload_proof(self):
        self.client.force_authenticate(self.stranger)
        resp = self.client.post("/api/v1/payments/proof/", {
            "orderId": str(self.order.id),
            "proofUrl": "https://cdn.example.com/receipt.png",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_confirms_payment(self):
        payment = self.order.payments.get()
        self.client.force_authenticate(self.admin)

        resp = self.client.patch(f"/api/v1/payments/{payment.id}/status/", {"status": "COMPLETED"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["payment_status"], "COMPLETED")

    def test_status_rejects_pending(self):
        payment = self.order.payments.get()
        self.client.force_authenticate(self.admin)

        resp = self.client.patch(f"/api/v1/payments/{payment.id}/status/", {"status": "PENDING"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stats_endpoint(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/v1/payments/stats/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["total_count"], 1)
