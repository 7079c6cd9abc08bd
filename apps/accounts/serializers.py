from rest_framework import serializers
from .models import User


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2,
        max_length=30,
        error_messages={
            "min_length": "Name must be at least 2 characters.",
            "max_length": "Name must not exceed 30 characters.",
        },
    )
    email = serializers.EmailField(
        max_length=50,
        error_messages={"invalid": "Invalid email format."},
    )
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        max_length=50,
        error_messages={
            "min_length": "Password must be at least 8 characters.",
            "max_length": "Password must not exceed 50 characters.",
        },
    )
    confirm_password = serializers.CharField(write_only=True, min_length=8, max_length=50)

    def validate(self, attrs):
        if attrs["password"] != attrs["confirm_password"]:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={"invalid": "Invalid email format."})
    password = serializers.CharField(write_only=True, min_length=8, max_length=50)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'role', 'date_joined']
        read_only_fields = fields
