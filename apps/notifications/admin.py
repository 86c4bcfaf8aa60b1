from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin interface for parent notifications."""

    list_display = ['get_student_name', 'type', 'read', 'created_at']
    list_filter = ['type', 'read', 'created_at']
    search_fields = ['canteen_student__enrolled_student__name', 'message']
    readonly_fields = ['canteen_student', 'type', 'message', 'details', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_student_name(self, obj):
        return obj.canteen_student.enrolled_student.name
    get_student_name.short_description = 'Élève'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('canteen_student__enrolled_student')
