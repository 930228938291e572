"""Customer DRF serializer for API output.

Input is parsed into ``CustomerDTO`` and validated by ``CustomerValidator``
in the Service Layer, so this serializer only renders stored customers.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "first_name",
            "last_name",
            "dni",
            "email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
