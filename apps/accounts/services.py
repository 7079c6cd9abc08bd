import logging

from django.contrib.auth import authenticate, login, logout
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.utils.exceptions import BusinessLogicException, DuplicateResourceException
from .models import User, Role

logger = logging.getLogger(__name__)


class AuthService:

    @staticmethod
    @transaction.atomic
    def register(name: str, email: str, password: str, role: str = Role.USER) -> User:
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateResourceException("Email already registered")

        user = User.objects.create_user(email=email, password=password, name=name, role=role)
        logger.info(f"User registered: {user.id}")
        return user

    @staticmethod
    def login(request, email: str, password: str) -> User:
        """
        Credentials check + session login.
        """
        user = authenticate(request, email=email, password=password)
        if user is None:
            logger.warning(f"Failed login attempt for {email}")
            raise BusinessLogicException("Invalid credentials", code="invalid_credentials")

        login(request, user)
        return user

    @staticmethod
    def logout(request, refresh_token=None):
        """
        Ends the session and, when given, blacklists the refresh token.
        """
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                raise BusinessLogicException("Invalid refresh token", code="invalid_token") from e
        logout(request)

    @staticmethod
    def issue_tokens(user: User) -> dict:
        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role
        return {"refresh": str(refresh), "access": str(refresh.access_token)}
