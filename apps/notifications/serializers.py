from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Parent-facing notification."""

    class Meta:
        model = Notification
        fields = [
            'id',
            'canteen_student',
            'message',
            'type',
            'details',
            'read',
            'created_at',
        ]
        read_only_fields = fields
