"""
Scheduling rules for surgeries.

Everything in this module is a pure function over plain values: the caller
reads the current surgeries and doctors (see ``surgeries.repositories``) and
passes them in. Nothing here touches the database, so the same inputs always
produce the same answer.

- check_conflict: is a candidate surgery schedulable, and if not, who clashes
- available_doctors: doctors not committed to any active surgery
- mark_selected: annotate a doctor list with the doctors of a surgery
- parse_doctor_ids / parse_surgery_date: input coercion at the boundary
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Any, Iterable

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from hospital_backend.surgeries.exceptions import Conflict, InvalidSchedulingData


# An undated candidate is compared against every date.
UNBOUNDED_START = datetime(1000, 1, 1, tzinfo=dt_timezone.utc)
UNBOUNDED_END = datetime(9999, 1, 1, tzinfo=dt_timezone.utc)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DoctorRef:
    id: int
    name: str


@dataclass(frozen=True)
class SurgerySnapshot:
    """The scheduling-relevant part of a stored surgery."""
    id: int
    date: datetime | date | None
    active: bool
    doctors: tuple[DoctorRef, ...] = ()

    @property
    def doctor_ids(self) -> frozenset[int]:
        return frozenset(d.id for d in self.doctors)


@dataclass(frozen=True)
class SurgeryCandidate:
    """Surgery data submitted for creation (``id=None``) or update."""
    doctor_ids: frozenset[int]
    date: datetime | date | None
    active: bool
    id: int | None = None


@dataclass(frozen=True)
class Clash:
    surgery_id: int
    doctor: DoctorRef


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of ``check_conflict``.

    An empty result (``NO_CONFLICT``) means the candidate is schedulable.
    """
    clashes: tuple[Clash, ...] = ()
    scheduled_for: datetime | date | None = None

    @property
    def has_conflict(self) -> bool:
        return bool(self.clashes)

    @property
    def doctors(self) -> tuple[DoctorRef, ...]:
        """Distinct clashing doctors, ordered by name."""
        seen: dict[int, DoctorRef] = {}
        for clash in self.clashes:
            seen.setdefault(clash.doctor.id, clash.doctor)
        return tuple(sorted(seen.values(), key=lambda d: (d.name, d.id)))

    @property
    def doctor_names(self) -> list[str]:
        return [d.name for d in self.doctors]

    @property
    def surgery_ids(self) -> list[int]:
        ids: list[int] = []
        for clash in self.clashes:
            if clash.surgery_id not in ids:
                ids.append(clash.surgery_id)
        return ids

    @property
    def message(self) -> str:
        if not self.has_conflict:
            return ''
        return format_conflict_message(self.doctor_names, self.scheduled_for)

    def to_conflicts(self) -> list[Conflict]:
        return [
            Conflict(
                id=clash.surgery_id,
                doctor_id=clash.doctor.id,
                message=f'Doctor {clash.doctor.name} is in active surgery #{clash.surgery_id}',
            )
            for clash in self.clashes
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            'conflict': self.has_conflict,
            'message': self.message,
            'doctors': [{'id': d.id, 'name': d.name} for d in self.doctors],
            'surgery_ids': self.surgery_ids,
        }


NO_CONFLICT = ConflictResult()


@dataclass(frozen=True)
class DoctorChoice:
    """A doctor offered in a surgery form, with its selection state."""
    doctor: Any
    selected: bool = False

    @property
    def checked(self) -> bool:
        return self.selected


# ---------------------------------------------------------------------------
# Calendar-day helpers
# ---------------------------------------------------------------------------

def _as_aware(value: datetime | date | None) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_current_timezone())
    return value


def local_day(value: datetime | date) -> date:
    """Calendar day of ``value`` in the current timezone."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localtime(value).date()
        return value.date()
    return value


def day_window(value: datetime | date | None) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` window of the local calendar day of ``value``.

    ``None`` (or an empty string) yields the unbounded window.
    """
    if value is None or value == '':
        return UNBOUNDED_START, UNBOUNDED_END
    start = timezone.make_aware(
        datetime.combine(local_day(value), time.min),
        timezone.get_current_timezone(),
    )
    return start, start + timedelta(days=1)


def format_conflict_message(doctor_names: list[str], scheduled_for: datetime | date | None) -> str:
    if scheduled_for is None or scheduled_for == '':
        when = 'an unspecified date'
    else:
        when = local_day(scheduled_for).isoformat()
    if len(doctor_names) == 1:
        return f'Doctor {doctor_names[0]} already has an active surgery on {when}.'
    listed = '; '.join(doctor_names)
    return f'Doctors {listed} already have active surgeries on {when}.'


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def check_conflict(
    candidate: SurgeryCandidate,
    existing_surgeries: Iterable[SurgerySnapshot],
) -> ConflictResult:
    """Decide whether ``candidate`` would double-book any of its doctors.

    Only active surgeries take part. A stored surgery clashes when it is
    active, falls on the candidate's calendar day, is not the candidate
    itself, and shares at least one doctor with it. An undated candidate is
    compared against all dates.
    """
    if not candidate.active:
        return NO_CONFLICT

    start, end = day_window(candidate.date)
    wanted = frozenset(candidate.doctor_ids)
    if not wanted:
        return NO_CONFLICT

    clashes: list[Clash] = []
    for surgery in existing_surgeries:
        if not surgery.active:
            continue
        if candidate.id is not None and surgery.id == candidate.id:
            continue
        when = _as_aware(surgery.date)
        if when is None or not (start <= when < end):
            continue
        for doctor in surgery.doctors:
            if doctor.id in wanted:
                clashes.append(Clash(surgery_id=surgery.id, doctor=doctor))

    if not clashes:
        return NO_CONFLICT
    return ConflictResult(clashes=tuple(clashes), scheduled_for=candidate.date)


def available_doctors(all_doctors: Iterable, active_surgeries: Iterable[SurgerySnapshot]) -> list:
    """Doctors not assigned to any active surgery, in input order.

    Every doctor of an active surgery counts as committed, not only the
    first one listed.
    """
    committed: set[int] = set()
    for surgery in active_surgeries:
        if surgery.active:
            committed.update(surgery.doctor_ids)
    return [doctor for doctor in all_doctors if doctor.id not in committed]


def mark_selected(doctors: Iterable, selected_ids: Iterable) -> list[DoctorChoice]:
    """Pair each doctor with whether it belongs to ``selected_ids``.

    Returns new ``DoctorChoice`` records; the doctor objects are not touched.
    """
    wanted = {int(i) for i in selected_ids}
    return [DoctorChoice(doctor=doctor, selected=doctor.id in wanted) for doctor in doctors]


# ---------------------------------------------------------------------------
# Boundary parsing
# ---------------------------------------------------------------------------

def parse_doctor_ids(value) -> list[int]:
    """Normalise a doctor field that may be missing, a scalar or a list.

    Order is kept and duplicates are dropped.
    """
    if value is None or value == '':
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        raw = list(value)
    else:
        raw = [value]

    ids: list[int] = []
    for item in raw:
        if isinstance(item, dict):
            item = item.get('id')
        if isinstance(item, bool):
            raise InvalidSchedulingData(f'Invalid doctor id: {item!r}', field='doctors')
        try:
            doctor_id = int(str(item).strip())
        except (TypeError, ValueError):
            raise InvalidSchedulingData(f'Invalid doctor id: {item!r}', field='doctors') from None
        if doctor_id not in ids:
            ids.append(doctor_id)
    return ids


def parse_surgery_date(value) -> datetime | None:
    """Parse a surgery date into an aware datetime.

    Accepts datetimes, dates and ISO strings (``YYYY-MM-DD`` or a full
    timestamp). Empty input gives ``None``.
    """
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return _as_aware(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is not None:
                parsed = datetime.combine(day, time.min)
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidSchedulingData(f'Invalid date: {text!r}', field='date')
    return _as_aware(parsed)
