from rest_framework import serializers

from apps.students.serializers import StrictInputSerializer
from .models import MealRecord


class ScanInputSerializer(StrictInputSerializer):
    """Body of a QR scan: the credential read from the code."""

    matriculeHashe = serializers.CharField(max_length=128)


class MealRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = MealRecord
        fields = [
            'id',
            'canteen_student',
            'served_at',
            'served_on',
            'served',
            'created_at',
        ]
        read_only_fields = fields


class MealHistoryEntrySerializer(serializers.Serializer):
    date = serializers.DateField()
    served = serializers.BooleanField()
