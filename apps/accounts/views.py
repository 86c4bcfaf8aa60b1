from django.contrib.auth import login as session_login, logout as session_logout
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .permissions import IsCanteenAdmin
from .serializers import AccountCreateSerializer, LoginSerializer, UserSerializer
from .services import authenticate_user, create_account


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(MessageResponseSerializer):
    code = serializers.CharField()


@extend_schema(
    request=LoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password. Opens a session and returns JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
    )

    session_login(request._request, user, backend='django.contrib.auth.backends.ModelBackend')
    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Connexion réussie.',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    request=None,
    responses={200: MessageResponseSerializer},
    description="Close the current session.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout and flush the session."""
    session_logout(request._request)
    return Response({'message': 'Déconnexion réussie.'})


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


class AccountCreatedResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()


@extend_schema(
    request=AccountCreateSerializer,
    responses={
        201: AccountCreatedResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Create an admin, serving agent or parent account. Admins only.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsCanteenAdmin])
def create_user(request):
    serializer = AccountCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = create_account(**serializer.validated_data)

    return Response(
        {
            'message': 'Utilisateur créé avec succès.',
            'user': UserSerializer(user).data,
        },
        status=status.HTTP_201_CREATED
    )
