"""
Surgery planning service.

Entry points used by both the REST API and the HTML catalog:

- plan_surgery: validate, check for double-booking, create
- update_surgery: same for an existing surgery (the surgery never clashes
  with itself)
- delete_surgery
- preview_conflict: run the scheduling check without writing
- list_available_doctors / list_doctor_choices: doctor lists for forms

Architecture Rules:
- Conflict detection is delegated to ``scheduling.check_conflict``; this
  module only gathers its inputs and acts on its result.
- The conflict check is repeated inside the write transaction, with the
  candidate doctors' rows locked, so two concurrent submissions for the same
  doctor cannot both pass on backends with row locking.
- All exceptions are custom types from ``surgeries.exceptions``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db import transaction

from hospital_backend.core.utils import log_action
from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.exceptions import InvalidSchedulingData, SchedulingConflictError
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.repositories import DoctorRepository, SurgeryRepository
from hospital_backend.surgeries.services.scheduling import (
    ConflictResult,
    DoctorChoice,
    SurgeryCandidate,
    available_doctors,
    check_conflict,
    mark_selected,
    parse_doctor_ids,
    parse_surgery_date,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------

def _id_of(value) -> Any:
    return getattr(value, 'pk', value)


def _required_text(data: dict, key: str) -> str:
    value = data.get(key)
    value = '' if value is None else str(value).strip()
    if not value:
        raise InvalidSchedulingData(f'{key} is required', field=key)
    return value


def _resolve_patient(value) -> Patient:
    if isinstance(value, Patient):
        return value
    if value in (None, ''):
        raise InvalidSchedulingData('patient is required', field='patient')
    try:
        patient_id = int(value)
    except (TypeError, ValueError):
        raise InvalidSchedulingData(f'Invalid patient id: {value!r}', field='patient') from None
    patient = Patient.objects.filter(id=patient_id).first()
    if patient is None:
        raise InvalidSchedulingData(f'Patient with ID {patient_id} not found', field='patient')
    return patient


def _doctor_ids_from(value) -> list[int]:
    if isinstance(value, (list, tuple)):
        value = [_id_of(v) for v in value]
    elif isinstance(value, Doctor):
        value = [value.pk]
    doctor_ids = parse_doctor_ids(value)
    if not doctor_ids:
        raise InvalidSchedulingData('At least one doctor is required', field='doctors')
    return doctor_ids


def _lock_doctors(doctor_ids: list[int]) -> list[Doctor]:
    """Load and row-lock the doctors. Must run inside a transaction."""
    doctors = list(Doctor.objects.select_for_update().filter(id__in=doctor_ids).order_by('id'))
    found = {d.id for d in doctors}
    missing = [i for i in doctor_ids if i not in found]
    if missing:
        raise InvalidSchedulingData(f'Doctors with IDs {missing} not found', field='doctors')
    return doctors


def _ensure_schedulable(candidate: SurgeryCandidate) -> None:
    result = check_conflict(candidate, SurgeryRepository.find_active_on_day(candidate.date))
    if result.has_conflict:
        logger.info(
            'Surgery conflict on %s for doctors %s (surgeries %s)',
            candidate.date, result.doctor_names, result.surgery_ids,
        )
        raise SchedulingConflictError(result.to_conflicts(), message=result.message)


# ---------------------------------------------------------------------------
# Read-side helpers
# ---------------------------------------------------------------------------

def preview_conflict(
    *,
    doctors,
    date,
    active: bool,
    surgery_id: int | None = None,
) -> ConflictResult:
    """Run the scheduling check for a candidate without saving anything.

    ``date`` may be empty, in which case the candidate is compared against
    active surgeries on every date.
    """
    when = parse_surgery_date(date)
    candidate = SurgeryCandidate(
        id=surgery_id,
        doctor_ids=frozenset(parse_doctor_ids(doctors)),
        date=when,
        active=bool(active),
    )
    return check_conflict(candidate, SurgeryRepository.find_active_on_day(when))


def list_available_doctors() -> list[Doctor]:
    """Doctors with no active surgery, for the create form."""
    return available_doctors(DoctorRepository.find_all(), SurgeryRepository.find_active())


def list_doctor_choices(*, selected_ids, available_only: bool = False) -> list[DoctorChoice]:
    doctors = list_available_doctors() if available_only else DoctorRepository.find_all()
    return mark_selected(doctors, selected_ids)


# ---------------------------------------------------------------------------
# Write-side entry points
# ---------------------------------------------------------------------------

def plan_surgery(*, data: dict) -> Surgery:
    """
    Create a surgery after validation and the double-booking check.

    Args:
        data: Dictionary with surgery data:
            - title: str (required)
            - summary: str (required)
            - date: datetime | date | ISO string (required)
            - patient: Patient | int (required)
            - doctors: list[Doctor | int] | int (required, non-empty)
            - active: bool (optional, defaults to False)

    Returns:
        The created Surgery instance

    Raises:
        InvalidSchedulingData: If required data is missing or invalid
        SchedulingConflictError: If a doctor is already in an active surgery that day
    """
    title = _required_text(data, 'title')
    summary = _required_text(data, 'summary')
    when = parse_surgery_date(data.get('date'))
    if when is None:
        raise InvalidSchedulingData('date is required', field='date')
    patient = _resolve_patient(data.get('patient'))
    doctor_ids = _doctor_ids_from(data.get('doctors'))
    active = bool(data.get('active', False))

    with transaction.atomic():
        doctors = _lock_doctors(doctor_ids)
        _ensure_schedulable(SurgeryCandidate(
            doctor_ids=frozenset(doctor_ids),
            date=when,
            active=active,
        ))
        surgery = Surgery.objects.create(
            title=title,
            summary=summary,
            date=when,
            patient=patient,
            active=active,
        )
        surgery.doctors.set(doctors)

    logger.info('Surgery #%s planned on %s (active=%s)', surgery.id, surgery.date_formatted, active)
    log_action(
        'surgery_create',
        'surgery',
        surgery.id,
        meta={'patient_id': patient.id, 'doctor_ids': doctor_ids, 'active': active},
    )
    return surgery


def update_surgery(surgery: Surgery, *, data: dict, partial: bool = False) -> Surgery:
    """
    Update a surgery, re-running the double-booking check.

    With ``partial=True`` missing keys keep their stored values. The surgery
    being updated is excluded from the conflict check.

    Raises:
        InvalidSchedulingData: If data is missing or invalid
        SchedulingConflictError: If the new date/doctors/active flag clash
    """
    def pick(key: str, current):
        return data[key] if (key in data or not partial) else current

    title = _required_text({'title': pick('title', surgery.title)}, 'title')
    summary = _required_text({'summary': pick('summary', surgery.summary)}, 'summary')
    when = parse_surgery_date(pick('date', surgery.date))
    if when is None:
        raise InvalidSchedulingData('date is required', field='date')
    patient = _resolve_patient(pick('patient', surgery.patient))
    if 'doctors' in data or not partial:
        doctor_ids = _doctor_ids_from(data.get('doctors'))
    else:
        doctor_ids = list(surgery.doctors.order_by('id').values_list('id', flat=True))
    active = bool(pick('active', surgery.active)) if partial else bool(data.get('active', False))

    with transaction.atomic():
        doctors = _lock_doctors(doctor_ids)
        _ensure_schedulable(SurgeryCandidate(
            id=surgery.id,
            doctor_ids=frozenset(doctor_ids),
            date=when,
            active=active,
        ))
        surgery.title = title
        surgery.summary = summary
        surgery.date = when
        surgery.patient = patient
        surgery.active = active
        surgery.save()
        surgery.doctors.set(doctors)

    logger.info('Surgery #%s updated (date=%s, active=%s)', surgery.id, surgery.date_formatted, active)
    log_action(
        'surgery_update',
        'surgery',
        surgery.id,
        meta={'patient_id': patient.id, 'doctor_ids': doctor_ids, 'active': active},
    )
    return surgery


def delete_surgery(surgery: Surgery) -> None:
    surgery_id = surgery.id
    meta = {'patient_id': surgery.patient_id, 'title': surgery.title}
    surgery.delete()
    logger.info('Surgery #%s deleted', surgery_id)
    log_action('surgery_delete', 'surgery', surgery_id, meta=meta)


def surgery_form_initial(surgery: Surgery) -> dict[str, Any]:
    """Initial form values for editing ``surgery``."""
    local: datetime = surgery.date
    return {
        'title': surgery.title,
        'summary': surgery.summary,
        'date': local,
        'patient': surgery.patient_id,
        'doctors': list(surgery.doctors.values_list('id', flat=True)),
        'active': surgery.active,
    }
