from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count, Q
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.ADMIN: '#8E3B46',
    UserRole.AGENT: '#2F6690',
    UserRole.PARENT: '#3A7D44',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for canteen users.

    Admins, serving agents and parents share one table and are told apart
    by ``role``. Parents are normally created by canteen registration.
    """

    list_display = ['email', 'name', 'role_badge', 'active_children', 'is_active', 'last_login']
    list_filter = ['role', 'is_active']
    search_fields = ['email', 'name']
    ordering = ['email']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        ('Compte', {'fields': ('email', 'name', 'role', 'password')}),
        ('Accès', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Historique', {'fields': ('created_at', 'last_login'), 'classes': ('collapse',)}),
    )
    add_fieldsets = (
        ('Nouvel utilisateur', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2'),
        }),
    )
    filter_horizontal = []
    actions = ['deactivate_accounts']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            active_children_count=Count('children', filter=Q(children__is_active=True))
        )

    def role_badge(self, obj):
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            ROLE_COLORS.get(obj.role, '#555'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Rôle'
    role_badge.admin_order_field = 'role'

    def active_children(self, obj):
        if obj.role != UserRole.PARENT:
            return '-'
        return obj.active_children_count
    active_children.short_description = 'Élèves inscrits'
    active_children.admin_order_field = 'active_children_count'

    @admin.action(description='Désactiver les comptes sélectionnés')
    def deactivate_accounts(self, request, queryset):
        # Superusers stay active so the admin site remains reachable
        count = queryset.filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f'{count} compte(s) désactivé(s).')
