from django.contrib import admin
from .models import CanteenStudent, EnrolledStudent


@admin.register(EnrolledStudent)
class EnrolledStudentAdmin(admin.ModelAdmin):
    """Admin interface for school enrollment records."""

    list_display = ['name', 'matricule', 'student_class', 'gender', 'created_at']
    list_filter = ['student_class', 'gender']
    search_fields = ['name', 'matricule']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']


@admin.register(CanteenStudent)
class CanteenStudentAdmin(admin.ModelAdmin):
    """Admin interface for canteen registrations."""

    list_display = ['get_student_name', 'parent', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = [
        'enrolled_student__name',
        'enrolled_student__matricule',
        'parent__email',
    ]
    readonly_fields = ['matricule_hash', 'created_at', 'updated_at']
    raw_id_fields = ['enrolled_student', 'parent']
    ordering = ['-created_at']

    fieldsets = (
        ('Inscription', {
            'fields': ('enrolled_student', 'parent', 'is_active')
        }),
        ('Identifiant QR', {
            'fields': ('matricule_hash',),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_student_name(self, obj):
        return obj.enrolled_student.name
    get_student_name.short_description = 'Élève'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('enrolled_student', 'parent')
