# apps/utils/tests.py
import json
import logging
from datetime import datetime
from decimal import Decimal

from django.test import TestCase, SimpleTestCase
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from .exceptions import (
    BusinessLogicException,
    DuplicateResourceException,
    custom_exception_handler,
    first_error_message,
)
from .logging import JSONFormatter
from .utils import dict_clean, generate_order_number, start_of_month, start_of_previous_month
from .validators import validate_phone, validate_positive_amount


class ValidatorTests(SimpleTestCase):
    def test_phone_validator(self):
        self.assertEqual(validate_phone("+6281234567890"), "+6281234567890")
        with self.assertRaises(ValidationError):
            validate_phone("123")  # Too short
        with self.assertRaises(ValidationError):
            validate_phone("08-1234-5678")

    def test_positive_amount(self):
        self.assertEqual(validate_positive_amount(Decimal("0.01")), Decimal("0.01"))
        for bad in (Decimal("0"), Decimal("-1"), None):
            with self.assertRaises(ValidationError):
                validate_positive_amount(bad)


class UtilsTests(SimpleTestCase):
    def test_order_number_shape_and_uniqueness(self):
        numbers = {generate_order_number() for _ in range(50)}
        self.assertEqual(len(numbers), 50)
        for number in numbers:
            self.assertRegex(number, r"^ORD-\d{13}-[0-9a-z]{9}$")

    def test_month_boundaries(self):
        day = timezone.make_aware(datetime(2024, 3, 15, 10, 30))
        self.assertEqual(start_of_month(day), timezone.make_aware(datetime(2024, 3, 1)))
        self.assertEqual(start_of_previous_month(day), timezone.make_aware(datetime(2024, 2, 1)))

        january = timezone.make_aware(datetime(2024, 1, 20))
        self.assertEqual(start_of_previous_month(january), timezone.make_aware(datetime(2023, 12, 1)))

    def test_dict_clean(self):
        self.assertEqual(dict_clean({"a": 1, "b": None, "c": "", "d": []}), {"a": 1})


class ExceptionHandlerTests(SimpleTestCase):
    def test_first_error_message_skips_empty_entries(self):
        detail = {"orderItems": [{}, {"quantity": ["Quantity must be at least 1"]}]}
        self.assertEqual(first_error_message(detail), "Quantity must be at least 1")
        self.assertIsNone(first_error_message({}))

    def test_business_error_maps_to_400(self):
        resp = custom_exception_handler(BusinessLogicException("Insufficient stock for Apple", code="insufficient_stock"), {})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data, {"error": "Insufficient stock for Apple", "code": "insufficient_stock"})

    def test_not_found_and_duplicate_codes(self):
        self.assertEqual(custom_exception_handler(BusinessLogicException("Order not found", code="not_found"), {}).status_code, 404)
        self.assertEqual(custom_exception_handler(DuplicateResourceException("taken"), {}).status_code, 409)

    def test_unhandled_error_is_500(self):
        logging.disable(logging.CRITICAL)
        try:
            resp = custom_exception_handler(RuntimeError("boom"), {})
        finally:
            logging.disable(logging.NOTSET)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data["error"], "Internal Server Error")


class JSONFormatterTests(SimpleTestCase):
    def test_sensitive_keys_are_redacted(self):
        record = logging.LogRecord(
            "apps.accounts", logging.INFO, __file__, 1,
            {"email": "a@example.com", "password": "hunter22"}, None, None,
        )
        record.order_id = "abc"

        payload = json.loads(JSONFormatter().format(record))

        self.assertIn("***REDACTED***", payload["msg"])
        self.assertNotIn("hunter22", payload["msg"])
        self.assertEqual(payload["order_id"], "abc")


class HealthCheckTests(TestCase):
    def test_health_ok(self):
        resp = self.client.get("/api/v1/utils/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["components"]["db"], "ok")

    def test_global_config(self):
        resp = self.client.get("/api/v1/utils/config/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("CASH", resp.json()["payment_methods"])
