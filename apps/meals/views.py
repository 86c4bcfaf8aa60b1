from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsServingAgent
from apps.meals.exceptions import AlreadyServedTodayError
from apps.notifications.serializers import NotificationSerializer
from apps.students.permissions import IsAdminOrStudentParent
from .serializers import MealHistoryEntrySerializer, MealRecordSerializer, ScanInputSerializer
from .services import admit, get_meal_history


# Response serializers for API documentation
class ScanGrantedResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    repas = MealRecordSerializer()
    notification = NotificationSerializer()


class ScanDeniedResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    reason = drf_serializers.CharField()
    alreadyScanned = drf_serializers.BooleanField(required=False)
    notification = NotificationSerializer(required=False)


@extend_schema(
    request=ScanInputSerializer,
    responses={
        200: ScanGrantedResponseSerializer,
        400: ScanDeniedResponseSerializer,
        404: ScanDeniedResponseSerializer,
    },
    description=(
        "Scan a student's QR code. Serves the meal when the student is active, "
        "holds a current subscription and has not eaten today."
    ),
    tags=['meals'],
)
@api_view(['POST'])
@permission_classes([IsServingAgent])
def scan(request):
    """Admission decision for a QR scan."""
    serializer = ScanInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    decision = admit(credential_token=serializer.validated_data['matriculeHashe'])

    if not decision.granted:
        body = {
            'message': decision.message,
            'reason': decision.reason,
        }
        if isinstance(decision.error, AlreadyServedTodayError):
            body['alreadyScanned'] = True
        if decision.notification is not None:
            body['notification'] = NotificationSerializer(decision.notification).data
        return Response(body, status=decision.error.status_code)

    return Response(
        {
            'message': decision.message,
            'repas': MealRecordSerializer(decision.meal_record).data,
            'notification': NotificationSerializer(decision.notification).data,
        },
        status=status.HTTP_200_OK
    )


@extend_schema(
    responses={200: MealHistoryEntrySerializer(many=True)},
    description="Meal calendar of a canteen student, oldest first.",
    tags=['meals'],
)
@api_view(['GET'])
@permission_classes([IsAdminOrStudentParent])
def meal_history(request, canteen_student_id):
    return Response(get_meal_history(canteen_student_id=canteen_student_id))
