"""
Surgeries App - Admin for surgeries

The admin form runs the same double-booking check as the API and the
catalog before a surgery is saved.
"""

from django import forms
from django.contrib import admin
from django.utils.html import format_html

from hospital_backend.core.admin import hospital_admin_site
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.services.planning import preview_conflict


class SurgeryAdminForm(forms.ModelForm):
    class Meta:
        model = Surgery
        fields = '__all__'

    def clean(self):
        cleaned = super().clean()
        doctors = cleaned.get('doctors')
        when = cleaned.get('date')
        if doctors and when:
            result = preview_conflict(
                doctors=[d.id for d in doctors],
                date=when,
                active=cleaned.get('active', False),
                surgery_id=self.instance.pk,
            )
            if result.has_conflict:
                raise forms.ValidationError(result.message, code='doctor_conflict')
        return cleaned


@admin.register(Surgery, site=hospital_admin_site)
class SurgeryAdmin(admin.ModelAdmin):
    form = SurgeryAdminForm

    list_display = ('id', 'title', 'date', 'patient', 'doctor_list', 'active_badge')
    list_filter = ('active', 'date')
    search_fields = ('title', 'summary', 'patient__family_name', 'doctors__family_name')
    ordering = ('-date',)
    date_hierarchy = 'date'
    list_per_page = 50
    filter_horizontal = ('doctors',)

    readonly_fields = ('id', 'created_at', 'updated_at')

    fieldsets = (
        ('Surgery', {
            'fields': ('title', 'date', 'active')
        }),
        ('People', {
            'fields': ('patient', 'doctors')
        }),
        ('Summary', {
            'fields': ('summary',)
        }),
        ('System', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('patient').prefetch_related('doctors')

    @admin.display(description='Doctors')
    def doctor_list(self, obj):
        return '; '.join(d.name for d in obj.doctors.all())

    @admin.display(description='Status', ordering='active')
    def active_badge(self, obj):
        color = '#34A853' if obj.active else '#9AA0A6'
        label = 'active' if obj.active else 'inactive'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 2px 8px; border-radius: 4px;">{}</span>',
            color,
            label,
        )
