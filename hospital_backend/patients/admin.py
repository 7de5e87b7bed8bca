"""
Patients App - Admin for patients
"""

from django.contrib import admin
from django.utils.html import format_html

from hospital_backend.core.admin import hospital_admin_site
from hospital_backend.patients.models import Patient


@admin.register(Patient, site=hospital_admin_site)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'lifespan', 'diagnosis_short')
    list_filter = ('created_at',)
    search_fields = ('first_name', 'family_name', 'diagnosis')
    ordering = ('family_name', 'first_name')
    list_per_page = 50

    readonly_fields = ('id', 'created_at', 'updated_at')

    fieldsets = (
        ('Patient', {
            'fields': ('first_name', 'family_name', 'date_of_birth', 'date_of_death')
        }),
        ('Medical', {
            'fields': ('diagnosis', 'treatment')
        }),
        ('System', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Name', ordering='family_name')
    def full_name(self, obj):
        return format_html('<strong style="color: #1A73E8;">{}</strong>', obj.name)

    @admin.display(description='Diagnosis')
    def diagnosis_short(self, obj):
        text = obj.diagnosis or ''
        return text if len(text) <= 60 else f'{text[:57]}...'

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.surgeries.exists():
            return False
        return super().has_delete_permission(request, obj)
