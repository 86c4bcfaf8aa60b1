from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.dashboard.analytics import DashboardQueries
from apps.subscriptions.models import Subscription, SubscriptionStatus


@pytest.mark.django_db
class TestDashboardQueries:

    def test_registrations(self, canteen_activity, dashboard_now):
        data = DashboardQueries.registrations(dashboard_now)

        # The withdrawn student is left out
        assert data['total_canteen_students'] == 2
        assert data['new_canteen_students_this_month'] == 1
        assert data['growth_rate'] == 0

    def test_lapsed_subscription_not_counted_active(self, canteen_activity, dashboard_now):
        data = DashboardQueries.subscriptions(dashboard_now, total_students=2)

        assert data['active_subscriptions'] == 1
        assert data['students_without_subscription'] == 1
        assert data['subscription_rate'] == 50

    def test_meals(self, canteen_activity, dashboard_now):
        data = DashboardQueries.meals(dashboard_now)

        assert data['meals_this_month'] == 3
        # January to March; December and the unserved record are left out
        assert data['meals_graph'] == [
            {'date': date(2025, 2, 3), 'total': 1},
            {'date': date(2025, 3, 10), 'total': 2},
            {'date': date(2025, 3, 14), 'total': 1},
        ]

    def test_revenue(self, canteen_activity, dashboard_now):
        data = DashboardQueries.revenue(dashboard_now)

        assert data['total_revenue'] == Decimal('19000.00')
        assert data['revenue_this_month'] == Decimal('5000.00')
        assert data['revenue_last_month'] == Decimal('14000.00')
        assert data['revenue_growth_rate'] == -64

    def test_empty_canteen(self, dashboard_now):
        data = DashboardQueries.overview(now=dashboard_now)

        assert data['total_canteen_students'] == 0
        assert data['subscription_rate'] == 0
        assert data['meals_graph'] == []
        assert data['total_revenue'] == Decimal('0.00')
        # No reference month counts as full growth
        assert data['growth_rate'] == 100
        assert data['revenue_growth_rate'] == 100

    def test_overview_is_read_only(self, canteen_activity, dashboard_now):
        DashboardQueries.overview(now=dashboard_now)

        lapsed = Subscription.objects.get(canteen_student=canteen_activity['ibrahima'])
        assert lapsed.status == SubscriptionStatus.ACTIVE


@pytest.mark.django_db
class TestDashboardOverview:
    """Tests for GET /api/dashboard/overview/"""

    def test_admin_gets_overview(self, admin_client, subscribed_student):
        response = admin_client.get(reverse('dashboard:overview'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_canteen_students'] == 1
        assert response.data['active_subscriptions'] == 1
        assert Decimal(response.data['total_revenue']) == Decimal('14000.00')
        assert response.data['meals_graph'] == []

    @pytest.mark.parametrize('client_fixture', ['agent_client', 'parent_client'])
    def test_non_admin_forbidden(self, request, client_fixture):
        client = request.getfixturevalue(client_fixture)

        response = client.get(reverse('dashboard:overview'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('dashboard:overview'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
