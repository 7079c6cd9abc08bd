from django.db.models import Count
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from .models import Customer
from .serializers import CustomerSerializer, CustomerDetailSerializer, CustomerProfileSerializer
from .services import CustomerService


class CustomerViewSet(viewsets.ModelViewSet):
    """
    Admin customer management.
    GET/POST /api/v1/customers/, GET/PUT/PATCH/DELETE /api/v1/customers/{id}/
    """
    queryset = Customer.objects.annotate(order_count=Count("orders")).order_by("-created_at")
    serializer_class = CustomerSerializer
    permission_classes = [IsAdmin]

    def get_serializer_class(self):
        if self.action == "retrieve":
            return CustomerDetailSerializer
        return CustomerSerializer

    def perform_create(self, serializer):
        serializer.instance = CustomerService.create_customer(serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = CustomerService.update_customer(
            serializer.instance.id, dict(serializer.validated_data)
        )

    def perform_destroy(self, instance):
        CustomerService.delete_customer(instance.id)

    @action(detail=False, methods=["get", "post"], permission_classes=[IsAuthenticated])
    def me(self, request):
        """
        GET  /api/v1/customers/me/ -> own profile with the 5 latest orders
        POST /api/v1/customers/me/ -> create own profile (once)
        """
        if request.method == "POST":
            serializer = CustomerSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            customer = CustomerService.create_profile(request.user, serializer.validated_data)
            return Response(CustomerProfileSerializer(customer).data, status=status.HTTP_201_CREATED)

        customer = CustomerService.get_current_user_customer(request.user)
        return Response(CustomerProfileSerializer(customer).data)

    @action(detail=False, methods=["get"])
    def summary(self, request):
        return Response(CustomerService.get_customer_summary())

    @action(detail=False, methods=["get"])
    def analytics(self, request):
        """
        GET /api/v1/customers/analytics/ -> top 10 spenders + 6-month signup growth
        """
        return Response(CustomerService.get_customer_analytics())
