from rest_framework import serializers

from apps.subscriptions.models import SubscriptionStatus
from .models import CanteenStudent, EnrolledStudent


class StrictInputSerializer(serializers.Serializer):
    """Input serializer that refuses keys it does not declare."""

    def to_internal_value(self, data):
        if hasattr(data, 'keys'):
            unknown = sorted(set(data.keys()) - set(self.fields.keys()))
            if unknown:
                raise serializers.ValidationError({
                    key: ['Champ non autorisé.'] for key in unknown
                })
        return super().to_internal_value(data)


class EnrolledStudentSerializer(serializers.ModelSerializer):
    """School enrollment record."""

    class Meta:
        model = EnrolledStudent
        fields = [
            'id',
            'name',
            'student_class',
            'gender',
            'matricule',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ParentSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()


class CanteenStudentSerializer(serializers.ModelSerializer):
    """Canteen registration with enrollment, parent and current subscription."""

    enrolled_student = EnrolledStudentSerializer(read_only=True)
    parent = ParentSummarySerializer(read_only=True)
    subscription = serializers.SerializerMethodField()

    class Meta:
        model = CanteenStudent
        fields = [
            'id',
            'enrolled_student',
            'parent',
            'matricule_hash',
            'is_active',
            'subscription',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'matricule_hash',
            'is_active',
            'created_at',
            'updated_at',
        ]

    def get_subscription(self, obj):
        # Uses the prefetched relation when the queryset provides it
        subscriptions = list(obj.subscriptions.all())
        if not subscriptions:
            return None
        current = next(
            (s for s in subscriptions if s.status == SubscriptionStatus.ACTIVE),
            max(subscriptions, key=lambda s: s.created_at),
        )
        return {
            'id': str(current.id),
            'duration': current.duration,
            'price': str(current.price),
            'tariff_type': current.tariff_type,
            'start_date': current.start_date.isoformat() if current.start_date else None,
            'end_date': current.end_date.isoformat() if current.end_date else None,
            'status': current.status,
        }


class CanteenRegistrationInputSerializer(StrictInputSerializer):
    """Body of a canteen registration request."""

    enrolled_student_id = serializers.UUIDField()
    parent_email = serializers.EmailField()
    parent_name = serializers.CharField(max_length=150)
    parent_password = serializers.CharField(
        required=False,
        allow_blank=True,
        write_only=True,
        min_length=8,
    )


class WithdrawInputSerializer(StrictInputSerializer):
    ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
