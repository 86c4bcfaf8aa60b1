"""
Dashboard Module
================

Aggregates for the canteen administrators' overview screen: registrations,
subscriptions, meals served and revenue, computed with ORM aggregates.

Classes:
    DashboardQueries: Static methods returning plain dictionaries.

Months are calendar months in ``settings.TIME_ZONE``, the same day boundary
the scan handler uses for "served today".

Revenue is the ``price`` of subscription rows counted at their latest
purchase (``start_date``). A renewal over a running subscription rewrites
the same row, so the earlier price of that row is no longer counted.

Note:
    This module is read-only and doesn't modify any data.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.meals.models import MealRecord
from apps.students.models import CanteenStudent
from apps.subscriptions.models import Subscription, SubscriptionStatus


def _month_start(day: date, months_back: int = 0) -> date:
    year, month = day.year, day.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return date(year, month, 1)


def _start_of(day: date) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min))


def _percent_change(current, previous) -> int:
    # No reference month counts as full growth
    if not previous:
        return 100
    return round((current - previous) / previous * 100)


class DashboardQueries:
    """
    Queries behind ``GET /api/dashboard/overview/``.

    Only students still registered at the canteen (``is_active``) are
    counted, for registrations, subscriptions and revenue alike.
    """

    @staticmethod
    def registrations(now):
        """Active registrations, new ones this month and the growth rate
        against last month."""
        today = timezone.localdate(now)
        this_month = _start_of(_month_start(today))
        last_month = _start_of(_month_start(today, 1))

        students = CanteenStudent.objects.filter(is_active=True)
        new_this_month = students.filter(created_at__gte=this_month).count()
        new_last_month = students.filter(
            created_at__gte=last_month,
            created_at__lt=this_month,
        ).count()

        return {
            'total_canteen_students': students.count(),
            'new_canteen_students_this_month': new_this_month,
            'growth_rate': _percent_change(new_this_month, new_last_month),
        }

    @staticmethod
    def subscriptions(now, total_students):
        """
        Students holding a subscription that grants access at ``now``.

        Lapsed rows the sweeper has not reached yet are not counted as active.
        """
        active = Subscription.objects.filter(
            canteen_student__is_active=True,
            status=SubscriptionStatus.ACTIVE,
            end_date__gte=now,
        ).count()
        rate = round(active / total_students * 100) if total_students else 0
        return {
            'active_subscriptions': active,
            'students_without_subscription': total_students - active,
            'subscription_rate': rate,
        }

    @staticmethod
    def meals(now, months=3):
        """Meals served this month and a daily series over the last ``months`` months."""
        today = timezone.localdate(now)
        served = MealRecord.objects.filter(served=True)

        series = (
            served
            .filter(served_on__gte=_month_start(today, months - 1), served_on__lte=today)
            .values('served_on')
            .annotate(total=Count('id'))
            .order_by('served_on')
        )
        return {
            'meals_this_month': served.filter(
                served_on__gte=_month_start(today),
                served_on__lte=today,
            ).count(),
            'meals_graph': [
                {'date': row['served_on'], 'total': row['total']}
                for row in series
            ],
        }

    @staticmethod
    def revenue(now):
        today = timezone.localdate(now)
        this_month = _start_of(_month_start(today))
        last_month = _start_of(_month_start(today, 1))

        paid = Subscription.objects.filter(
            canteen_student__is_active=True,
            price__gt=0,
            start_date__isnull=False,
        )
        zero = Decimal('0.00')

        def total(queryset):
            return queryset.aggregate(
                total=Coalesce(Sum('price'), zero, output_field=DecimalField())
            )['total']

        this_month_total = total(paid.filter(start_date__gte=this_month, start_date__lte=now))
        last_month_total = total(paid.filter(start_date__gte=last_month, start_date__lt=this_month))

        return {
            'total_revenue': total(paid),
            'revenue_this_month': this_month_total,
            'revenue_last_month': last_month_total,
            'revenue_growth_rate': _percent_change(this_month_total, last_month_total),
        }

    @staticmethod
    def overview(now=None):
        """All dashboard figures in one dictionary."""
        now = now or timezone.now()
        data = DashboardQueries.registrations(now)
        data.update(DashboardQueries.subscriptions(now, data['total_canteen_students']))
        data.update(DashboardQueries.meals(now))
        data.update(DashboardQueries.revenue(now))
        return data
