"""
Doctors App - Admin for doctors
"""

from django.contrib import admin
from django.utils.html import format_html

from hospital_backend.core.admin import hospital_admin_site
from hospital_backend.doctors.models import Doctor


@admin.register(Doctor, site=hospital_admin_site)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name_display', 'date_of_birth', 'expertise_display', 'surgery_count')
    search_fields = ('first_name', 'family_name', 'extra_info')
    ordering = ('family_name', 'first_name')
    list_per_page = 50

    readonly_fields = ('id', 'created_at', 'updated_at')

    fieldsets = (
        ('Doctor', {
            'fields': ('first_name', 'family_name', 'date_of_birth', 'gender')
        }),
        ('Expertise', {
            'fields': ('expertise', 'extra_info')
        }),
        ('System', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Name', ordering='family_name')
    def name_display(self, obj):
        return format_html('<strong style="color: #1A73E8;">{}</strong>', obj.name)

    @admin.display(description='Expertise')
    def expertise_display(self, obj):
        return ', '.join(obj.expertise or [])

    @admin.display(description='Surgeries')
    def surgery_count(self, obj):
        return obj.surgeries.count()

    def has_delete_permission(self, request, obj=None):
        # Linked doctors are deleted only after their surgeries.
        if obj is not None and obj.surgeries.exists():
            return False
        return super().has_delete_permission(request, obj)
