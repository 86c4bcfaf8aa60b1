from django.contrib import admin
from .models import MealRecord


@admin.register(MealRecord)
class MealRecordAdmin(admin.ModelAdmin):
    """Admin interface for served meals."""

    list_display = ['get_student_name', 'served_on', 'served_at', 'served']
    list_filter = ['served', 'served_on']
    search_fields = ['canteen_student__enrolled_student__name']
    readonly_fields = ['canteen_student', 'served_at', 'served_on', 'served', 'created_at']
    date_hierarchy = 'served_on'
    ordering = ['-served_on']

    def get_student_name(self, obj):
        return obj.canteen_student.enrolled_student.name
    get_student_name.short_description = 'Élève'
