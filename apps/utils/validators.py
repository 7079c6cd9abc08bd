import re
from rest_framework import serializers


def validate_phone(value):
    pattern = r"^\+?\d{8,15}$"
    if not re.match(pattern, str(value)):
        raise serializers.ValidationError("Invalid phone number format.")
    return value


def validate_positive_amount(value):
    if value is None or value <= 0:
        raise serializers.ValidationError("Price must be positive")
    return value
