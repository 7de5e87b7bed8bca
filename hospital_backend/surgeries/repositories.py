"""Read access to stored surgeries and doctors.

The scheduling rules take plain snapshots rather than model instances, so
the repositories here are the one place that turns querysets into
``SurgerySnapshot`` / ``DoctorRef`` values. Results reflect the latest
committed state visible to the read; nothing is cached.
"""

from __future__ import annotations

from datetime import date, datetime

from django.db.models import QuerySet

from hospital_backend.doctors.models import Doctor
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.services.scheduling import (
    DoctorRef,
    SurgerySnapshot,
    day_window,
)


def snapshot_of(surgery: Surgery) -> SurgerySnapshot:
    return SurgerySnapshot(
        id=surgery.id,
        date=surgery.date,
        active=surgery.active,
        doctors=tuple(DoctorRef(id=d.id, name=d.name) for d in surgery.doctors.all()),
    )


class SurgeryRepository:
    """Queries over the surgery table."""

    @staticmethod
    def queryset() -> QuerySet:
        return (
            Surgery.objects.all()
            .select_related('patient')
            .prefetch_related('doctors')
            .order_by('date', 'id')
        )

    @classmethod
    def _snapshots(cls, qs: QuerySet) -> list[SurgerySnapshot]:
        return [snapshot_of(s) for s in qs]

    @classmethod
    def find_all(cls) -> list[SurgerySnapshot]:
        return cls._snapshots(cls.queryset())

    @classmethod
    def find_active(cls) -> list[SurgerySnapshot]:
        return cls._snapshots(cls.queryset().filter(active=True))

    @classmethod
    def find_active_on_day(cls, day: date | datetime | None) -> list[SurgerySnapshot]:
        """Active surgeries on the local calendar day of ``day``.

        ``None`` returns active surgeries on every date.
        """
        start, end = day_window(day)
        return cls._snapshots(
            cls.queryset().filter(active=True, date__gte=start, date__lt=end)
        )

    @classmethod
    def search(
        cls,
        *,
        day: date | datetime | None = None,
        active: bool | None = None,
        doctor_ids: list[int] | None = None,
    ) -> QuerySet:
        """Filtered surgery list. Each filter applies only when given."""
        qs = cls.queryset()
        if day is not None:
            start, end = day_window(day)
            qs = qs.filter(date__gte=start, date__lt=end)
        if active is not None:
            qs = qs.filter(active=active)
        if doctor_ids:
            qs = qs.filter(doctors__id__in=doctor_ids).distinct()
        return qs

    @staticmethod
    def counts() -> dict[str, int]:
        return {
            'surgery_count': Surgery.objects.count(),
            'surgery_active_count': Surgery.objects.filter(active=True).count(),
        }


class DoctorRepository:
    """Queries over the doctor table."""

    @staticmethod
    def find_all() -> list[Doctor]:
        return list(Doctor.objects.all().order_by('family_name', 'first_name', 'id'))

