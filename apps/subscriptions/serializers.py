from django.utils import timezone
from rest_framework import serializers

from apps.students.serializers import StrictInputSerializer
from .models import Subscription


class SubscriptionSerializer(serializers.ModelSerializer):
    """Subscription with its access state computed at read time."""

    has_access = serializers.SerializerMethodField()

    class Meta:
        model = Subscription
        fields = [
            'id',
            'canteen_student',
            'duration',
            'price',
            'tariff_type',
            'start_date',
            'end_date',
            'status',
            'has_access',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [f for f in fields if f != 'has_access']

    def get_has_access(self, obj):
        return obj.grants_access_at(self.context.get('now') or timezone.now())


class PurchaseInputSerializer(StrictInputSerializer):
    """Body of a subscription purchase: the duration in days, nothing else."""

    duration = serializers.IntegerField(min_value=1)


class TariffSerializer(serializers.Serializer):
    duration = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    type = serializers.CharField()
