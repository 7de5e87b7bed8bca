"""
Catalog forms.

Doctor and patient forms are plain model forms. The surgery form is not a
model form: saving goes through ``surgeries.services.planning`` so the
double-booking check runs before the write.
"""

from django import forms
from django.core.exceptions import ValidationError

from hospital_backend.core.validators import normalize_tags
from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient

DATE_INPUT = forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d')


class TagsField(forms.CharField):
    """Comma separated tags, stored as a list."""

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ', '.join(value)
        return value

    def to_python(self, value):
        return normalize_tags(super().to_python(value))

    def validate(self, value):
        if self.required and not value:
            raise ValidationError(self.error_messages['required'], code='required')


class DoctorForm(forms.ModelForm):
    expertise = TagsField(help_text='Comma separated, e.g. "Cardiology, Trauma"')
    gender = TagsField(help_text='Comma separated')

    class Meta:
        model = Doctor
        fields = ['first_name', 'family_name', 'date_of_birth', 'expertise', 'gender', 'extra_info']
        widgets = {
            'date_of_birth': DATE_INPUT,
            'extra_info': forms.Textarea(attrs={'rows': 3}),
        }


class PatientForm(forms.ModelForm):
    class Meta:
        model = Patient
        fields = ['first_name', 'family_name', 'date_of_birth', 'date_of_death', 'diagnosis', 'treatment']
        widgets = {
            'date_of_birth': DATE_INPUT,
            'date_of_death': DATE_INPUT,
            'diagnosis': forms.Textarea(attrs={'rows': 3}),
            'treatment': forms.Textarea(attrs={'rows': 3}),
        }


class SurgeryForm(forms.Form):
    """Surgery input. ``doctors`` accepts any stored doctor id."""

    title = forms.CharField(max_length=255)
    date = forms.DateTimeField(
        input_formats=['%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d'],
        widget=forms.DateTimeInput(attrs={'type': 'datetime-local'}, format='%Y-%m-%dT%H:%M'),
    )
    summary = forms.CharField(widget=forms.Textarea(attrs={'rows': 4}))
    patient = forms.ModelChoiceField(queryset=Patient.objects.order_by('family_name', 'first_name', 'id'))
    doctors = forms.TypedMultipleChoiceField(coerce=int, choices=())
    active = forms.BooleanField(required=False)

    def __init__(self, *args, doctors=None, **kwargs):
        super().__init__(*args, **kwargs)
        if doctors is None:
            doctors = Doctor.objects.all()
        self.fields['doctors'].choices = [(d.id, d.name) for d in doctors]


class SurgeryFilterForm(forms.Form):
    """Filters for the surgery list; empty fields do not filter."""

    date = forms.DateField(required=False, widget=DATE_INPUT)
    active = forms.BooleanField(required=False)
    doctor = forms.ModelMultipleChoiceField(
        queryset=Doctor.objects.all(),
        required=False,
        widget=forms.CheckboxSelectMultiple,
    )
