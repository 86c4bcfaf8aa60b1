from rest_framework import mixins, status, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCanteenAdmin
from .permissions import IsAdminOrSelfParent, IsAdminOrStudentParent
from .serializers import (
    CanteenRegistrationInputSerializer,
    CanteenStudentSerializer,
    EnrolledStudentSerializer,
    WithdrawInputSerializer,
)
from .services import (
    get_canteen_student,
    get_students_for_parent,
    list_canteen_students,
    re_register_canteen_student,
    register_canteen_student,
    search_enrolled_students,
    withdraw_canteen_students,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    code = drf_serializers.CharField()


class RegistrationResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    student = CanteenStudentSerializer()


class WithdrawResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    count = drf_serializers.IntegerField()


class StudentPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _parse_is_active(value):
    if value is None:
        return True
    value = value.lower()
    if value == 'all':
        return None
    return value not in ('false', '0', 'no')


def _list_students(request):
    students = list_canteen_students(
        is_active=_parse_is_active(request.query_params.get('is_active')),
        search=request.query_params.get('search', ''),
    )
    paginator = StudentPagination()
    page = paginator.paginate_queryset(students, request)
    serializer = CanteenStudentSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


def _register_student(request):
    serializer = CanteenRegistrationInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    student, created = register_canteen_student(
        enrolled_student_id=serializer.validated_data['enrolled_student_id'],
        parent_email=serializer.validated_data['parent_email'],
        parent_name=serializer.validated_data['parent_name'],
        parent_password=serializer.validated_data.get('parent_password') or None,
    )
    student = get_canteen_student(canteen_student_id=student.id)

    return Response(
        {
            'message': (
                'Élève inscrit à la cantine avec succès.' if created
                else 'Élève réinscrit à la cantine avec succès.'
            ),
            'student': CanteenStudentSerializer(student).data,
        },
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


def _withdraw_students(request):
    serializer = WithdrawInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    count = withdraw_canteen_students(student_ids=serializer.validated_data['ids'])
    return Response({
        'message': 'Élève(s) retiré(s) de la cantine avec succès.',
        'count': count,
    })


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('search', OpenApiTypes.STR, description='Search in student name or matricule'),
        OpenApiParameter('is_active', OpenApiTypes.STR, description="true (default), false or all"),
    ],
    responses={200: CanteenStudentSerializer(many=True)},
    description="List canteen registrations.",
    tags=['students'],
)
@extend_schema(
    methods=['POST'],
    request=CanteenRegistrationInputSerializer,
    responses={
        201: RegistrationResponseSerializer,
        200: RegistrationResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Register an enrolled student at the canteen. Returns 200 when a withdrawn registration is reactivated.",
    tags=['students'],
)
@extend_schema(
    methods=['DELETE'],
    request=WithdrawInputSerializer,
    responses={200: WithdrawResponseSerializer, 404: ErrorResponseSerializer},
    description="Withdraw one or more students from the canteen. History is kept.",
    tags=['students'],
)
@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsCanteenAdmin])
def canteen_students(request):
    """List, register or withdraw canteen students."""
    if request.method == 'POST':
        return _register_student(request)
    if request.method == 'DELETE':
        return _withdraw_students(request)
    return _list_students(request)


@extend_schema(
    responses={200: CanteenStudentSerializer, 404: ErrorResponseSerializer},
    description="Get a canteen student with current subscription.",
    tags=['students'],
)
@api_view(['GET'])
@permission_classes([IsAdminOrStudentParent])
def canteen_student_detail(request, canteen_student_id):
    student = get_canteen_student(canteen_student_id=canteen_student_id)
    return Response(CanteenStudentSerializer(student).data)


@extend_schema(
    request=None,
    responses={
        200: RegistrationResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Reactivate a withdrawn canteen registration.",
    tags=['students'],
)
@api_view(['POST'])
@permission_classes([IsCanteenAdmin])
def re_register_student(request, canteen_student_id):
    re_register_canteen_student(canteen_student_id=canteen_student_id)
    student = get_canteen_student(canteen_student_id=canteen_student_id)
    return Response({
        'message': 'Élève réinscrit à la cantine avec succès.',
        'student': CanteenStudentSerializer(student).data,
    })


@extend_schema(
    responses={200: CanteenStudentSerializer(many=True), 404: ErrorResponseSerializer},
    description="List the canteen students linked to a parent account.",
    tags=['students'],
)
@api_view(['GET'])
@permission_classes([IsAdminOrSelfParent])
def parent_students(request, parent_id):
    students = get_students_for_parent(parent_id=parent_id)
    return Response(CanteenStudentSerializer(students, many=True).data)


class EnrolledStudentViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.UpdateModelMixin,
                             viewsets.GenericViewSet):
    """
    School enrollment records.

    list: Enrolled students, filtered by ``search`` (name or matricule)
    retrieve: One enrolled student
    update / partial_update: Edit enrollment data
    """

    serializer_class = EnrolledStudentSerializer
    permission_classes = [IsCanteenAdmin]
    pagination_class = StudentPagination

    def get_queryset(self):
        return search_enrolled_students(search=self.request.query_params.get('search', ''))

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR, description='Search in name or matricule'),
        ],
        tags=['students'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
