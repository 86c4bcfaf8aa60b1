from django.contrib import admin
from .models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """
    Admin interface for subscriptions.

    Status changes go through the purchase service and the sweeper, so the
    lifecycle fields are read-only here.
    """

    list_display = [
        'get_student_name',
        'tariff_type',
        'duration',
        'price',
        'status',
        'end_date',
    ]
    list_filter = ['status', 'tariff_type']
    search_fields = ['canteen_student__enrolled_student__name']
    readonly_fields = [
        'canteen_student',
        'duration',
        'price',
        'tariff_type',
        'start_date',
        'end_date',
        'status',
        'created_at',
        'updated_at',
    ]
    ordering = ['-created_at']

    def get_student_name(self, obj):
        return obj.canteen_student.enrolled_student.name
    get_student_name.short_description = 'Élève'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('canteen_student__enrolled_student')
