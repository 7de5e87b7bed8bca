from django.core.exceptions import ValidationError
from django.db import models
from django.urls import reverse

from hospital_backend.core.utils import format_iso_day, format_long_date
from hospital_backend.core.validators import validate_alphanumeric_name


class Patient(models.Model):
    """A patient who can undergo surgeries.

    ``diagnosis`` is required; ``treatment`` is free text. ``date_of_death``
    is optional but may not precede ``date_of_birth``.
    """

    first_name = models.CharField(max_length=100, validators=[validate_alphanumeric_name])
    family_name = models.CharField(max_length=100, validators=[validate_alphanumeric_name])
    date_of_birth = models.DateField(null=True, blank=True)
    date_of_death = models.DateField(null=True, blank=True)
    diagnosis = models.TextField()
    treatment = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patients_patient'
        ordering = ['family_name', 'first_name', 'id']
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'

    def __str__(self) -> str:
        return self.name

    def clean(self):
        super().clean()
        if self.date_of_birth and self.date_of_death and self.date_of_death < self.date_of_birth:
            raise ValidationError({'date_of_death': 'Date of death must not be before date of birth.'})

    @property
    def name(self) -> str:
        return f'{self.family_name}, {self.first_name}'

    @property
    def lifespan(self) -> str:
        return f'{format_long_date(self.date_of_birth)} - {format_long_date(self.date_of_death)}'

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return format_iso_day(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return format_iso_day(self.date_of_death)

    def get_absolute_url(self) -> str:
        return reverse('catalog:patient_detail', args=[self.pk])
