from django.db import models
from django.urls import reverse

from hospital_backend.core.utils import format_iso_day, format_long_date
from hospital_backend.core.validators import validate_alphanumeric_name


class Doctor(models.Model):
    """A doctor who can be assigned to surgeries.

    ``expertise`` and ``gender`` are lists of free-form tags; both must carry
    at least one entry.
    """

    first_name = models.CharField(max_length=100, validators=[validate_alphanumeric_name])
    family_name = models.CharField(max_length=100, validators=[validate_alphanumeric_name])
    date_of_birth = models.DateField(null=True, blank=True)
    expertise = models.JSONField(default=list)
    gender = models.JSONField(default=list)
    extra_info = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'doctors_doctor'
        ordering = ['family_name', 'first_name', 'id']
        verbose_name = 'Doctor'
        verbose_name_plural = 'Doctors'

    def __str__(self) -> str:
        return self.name

    @property
    def name(self) -> str:
        return f'{self.family_name}, {self.first_name}'

    @property
    def date_of_birth_formatted(self) -> str:
        return format_long_date(self.date_of_birth)

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return format_iso_day(self.date_of_birth)

    def get_absolute_url(self) -> str:
        return reverse('catalog:doctor_detail', args=[self.pk])
