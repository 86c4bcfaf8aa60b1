from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.students.serializers import StrictInputSerializer
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """Account as shown to the logged-in user and in login responses."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'display_name', 'role', 'created_at', 'last_login']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'},
    )

    def validate_email(self, value):
        return value.strip().lower()


class AccountCreateSerializer(StrictInputSerializer):
    """Body of an account creation request (admins only)."""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=150)
    role = serializers.ChoiceField(choices=UserRole.choices)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'},
    )

    def validate(self, attrs):
        candidate = User(email=attrs['email'], name=attrs['name'], role=attrs['role'])
        try:
            validate_password(attrs['password'], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})
        return attrs
