from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsCanteenAdmin
from .analytics import DashboardQueries
from .serializers import DashboardOverviewSerializer


@extend_schema(
    responses={200: DashboardOverviewSerializer},
    description=(
        "Canteen overview for administrators: registrations, subscriptions, "
        "meals served over the last three months and revenue."
    ),
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsCanteenAdmin])
def overview(request):
    """Dashboard figures - thin HTTP handler."""
    data = DashboardQueries.overview()
    return Response(DashboardOverviewSerializer(data).data)
