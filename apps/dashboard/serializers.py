"""Response serializers for the dashboard (API documentation and output)."""

from rest_framework import serializers


class MealsGraphPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    total = serializers.IntegerField()


class DashboardOverviewSerializer(serializers.Serializer):
    """Admin dashboard figures."""
    total_canteen_students = serializers.IntegerField()
    new_canteen_students_this_month = serializers.IntegerField()
    growth_rate = serializers.IntegerField()
    active_subscriptions = serializers.IntegerField()
    students_without_subscription = serializers.IntegerField()
    subscription_rate = serializers.IntegerField()
    meals_this_month = serializers.IntegerField()
    meals_graph = MealsGraphPointSerializer(many=True)
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    revenue_this_month = serializers.DecimalField(max_digits=12, decimal_places=2)
    revenue_last_month = serializers.DecimalField(max_digits=12, decimal_places=2)
    revenue_growth_rate = serializers.IntegerField()
