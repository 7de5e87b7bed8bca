"""
Hospital records admin site and audit log admin.
"""

from django.contrib import admin
from django.contrib.admin import AdminSite
from django.utils.html import format_html

from .models import AuditLog


class HospitalAdminSite(AdminSite):
    """Admin site for the hospital records."""
    site_header = 'Hospital Records'
    site_title = 'Hospital Records Admin'
    index_title = 'Records'

    def each_context(self, request):
        context = super().each_context(request)
        context['catalog_url'] = '/catalog/'
        return context


hospital_admin_site = HospitalAdminSite(name='hospital_admin')


@admin.register(AuditLog, site=hospital_admin_site)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only view of the audit trail."""

    list_display = ('timestamp', 'action_badge', 'object_type', 'object_id')
    list_filter = ('action', 'object_type')
    search_fields = ('action', 'object_type', 'object_id')
    ordering = ('-timestamp', '-id')
    list_per_page = 100
    readonly_fields = ('action', 'object_type', 'object_id', 'timestamp', 'meta')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    @admin.display(description='Action')
    def action_badge(self, obj):
        color = '#C5221F' if obj.action.endswith('_delete') else '#1A73E8'
        return format_html(
            '<span style="font-family: monospace; color: {};">{}</span>',
            color,
            obj.action,
        )
