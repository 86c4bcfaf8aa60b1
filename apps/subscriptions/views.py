from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.notifications.serializers import NotificationSerializer
from apps.students.permissions import IsAdminOrStudentParent
from .serializers import PurchaseInputSerializer, SubscriptionSerializer, TariffSerializer
from .services import get_student_subscriptions, list_tariffs, purchase_subscription


# Response serializers for API documentation
class PurchaseResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    abonnement = SubscriptionSerializer()
    notification = NotificationSerializer()


class ErrorResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    code = drf_serializers.CharField()


@extend_schema(
    request=PurchaseInputSerializer,
    responses={
        201: PurchaseResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        500: ErrorResponseSerializer,
    },
    description=(
        "Buy a subscription for a canteen student. A lapsed subscription is "
        "expired first; a current one is replaced starting now."
    ),
    tags=['subscriptions'],
)
@api_view(['POST'])
@permission_classes([IsAdminOrStudentParent])
def purchase(request, canteen_student_id):
    """Purchase a subscription using service layer."""
    serializer = PurchaseInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = purchase_subscription(
        canteen_student_id=canteen_student_id,
        duration=serializer.validated_data['duration'],
    )

    return Response(
        {
            'message': 'Abonnement acheté avec succès.',
            'abonnement': SubscriptionSerializer(result.subscription).data,
            'notification': NotificationSerializer(result.notification).data,
        },
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    responses={200: SubscriptionSerializer(many=True), 404: ErrorResponseSerializer},
    description="Subscription history of a canteen student, newest first.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([IsAdminOrStudentParent])
def student_subscriptions(request, canteen_student_id):
    subscriptions = get_student_subscriptions(canteen_student_id=canteen_student_id)
    return Response(SubscriptionSerializer(subscriptions, many=True).data)


@extend_schema(
    responses={200: TariffSerializer(many=True)},
    description="Available subscription durations with their price.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tariffs(request):
    return Response(TariffSerializer(list_tariffs(), many=True).data)
