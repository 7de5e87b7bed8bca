from django.db import models
from django.urls import reverse

from hospital_backend.core.utils import format_iso_day


class Surgery(models.Model):
    """A surgery for one patient, performed by one or more doctors.

    Medical meaning:
    - ``active`` marks a surgery that currently occupies its doctors'
      schedules. A doctor may be in at most one active surgery per calendar
      day; see ``surgeries.services.scheduling.check_conflict``.

    Technical notes:
    - ``date`` is a timestamp, but conflicts are decided per local calendar
      day, so the time-of-day part never matters for scheduling.
    - Patients are protected from deletion while referenced. Doctor
      deletion is refused by the doctors service layer because an M2M link
      alone would silently drop the through rows.
    """

    title = models.CharField(max_length=255)
    date = models.DateTimeField(db_index=True)
    summary = models.TextField()
    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.PROTECT,
        related_name='surgeries',
    )
    doctors = models.ManyToManyField(
        'doctors.Doctor',
        related_name='surgeries',
    )
    active = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'surgeries_surgery'
        ordering = ['date', 'id']
        verbose_name = 'Surgery'
        verbose_name_plural = 'Surgeries'
        indexes = [
            models.Index(fields=['active', 'date'], name='surgery_active_date_idx'),
        ]

    def __str__(self) -> str:
        return f'{self.title} ({self.date_formatted})'

    @property
    def date_formatted(self) -> str:
        return format_iso_day(self.date)

    def get_absolute_url(self) -> str:
        return reverse('catalog:surgery_detail', args=[self.pk])
