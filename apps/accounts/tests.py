from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status

from apps.accounts.models import User, Role
from apps.accounts.services import AuthService
from apps.utils.exceptions import BusinessLogicException, DuplicateResourceException


class AuthServiceTests(TestCase):

    def test_register_creates_user_with_hashed_password(self):
        user = AuthService.register(name="Rina", email="rina@example.com", password="secret123")

        self.assertEqual(user.role, Role.USER)
        self.assertNotEqual(user.password, "secret123")
        self.assertTrue(user.check_password("secret123"))

    def test_register_rejects_duplicate_email(self):
        AuthService.register(name="Rina", email="rina@example.com", password="secret123")

        with self.assertRaises(DuplicateResourceException) as ctx:
            AuthService.register(name="Other", email="RINA@example.com", password="secret123")
        self.assertEqual(ctx.exception.message, "Email already registered")

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="boss@example.com", password="secret123", name="Boss")
        self.assertTrue(admin.is_admin)
        self.assertTrue(admin.is_staff)


class AuthApiTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="budi@example.com", password="secret123", name="Budi")

    def test_register_endpoint(self):
        response = self.client.post("/api/v1/accounts/register/", {
            "name": "Sari",
            "email": "sari@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["email"], "sari@example.com")
        self.assertTrue(User.objects.filter(email="sari@example.com").exists())

    def test_register_password_mismatch(self):
        response = self.client.post("/api/v1/accounts/register/", {
            "name": "Sari",
            "email": "sari@example.com",
            "password": "secret123",
            "confirm_password": "secret999",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email="sari@example.com").exists())

    def test_register_duplicate_email_is_conflict(self):
        response = self.client.post("/api/v1/accounts/register/", {
            "name": "Budi Two",
            "email": "budi@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "Email already registered")

    def test_login_returns_tokens(self):
        response = self.client.post("/api/v1/accounts/login/", {
            "email": "budi@example.com",
            "password": "secret123",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "budi@example.com")

    def test_login_invalid_credentials(self):
        response = self.client.post("/api/v1/accounts/login/", {
            "email": "budi@example.com",
            "password": "wrongpass",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid credentials")

    def test_me_requires_authentication(self):
        response = self.client.get("/api/v1/accounts/me/")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_me_with_jwt(self):
        tokens = AuthService.issue_tokens(self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.get("/api/v1/accounts/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Budi")
        self.assertEqual(response.data["role"], "USER")

    def test_login_service_raises_on_bad_password(self):
        with self.assertRaises(BusinessLogicException):
            AuthService.login(None, email="budi@example.com", password="nope12345")

    def test_logout_blacklists_refresh_token(self):
        tokens = AuthService.issue_tokens(self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post("/api/v1/accounts/logout/", {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        self.client.credentials()
        response = self.client.post("/api/v1/accounts/token/refresh/", {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_garbage_refresh_token(self):
        self.client.force_authenticate(self.user)

        response = self.client.post("/api/v1/accounts/logout/", {"refresh": "not-a-token"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid refresh token")
