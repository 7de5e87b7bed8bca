"""
Surgeries Services Module.

This package contains service-layer logic for the surgeries app:
- scheduling: pure scheduling rules (conflict check, availability, selection)
- planning: create/update/delete of surgeries guarded by the scheduling rules

Only the pure rules are re-exported here; ``planning`` depends on the
repositories and is imported from its own module.
"""

from hospital_backend.surgeries.services.scheduling import (
    NO_CONFLICT,
    Clash,
    ConflictResult,
    DoctorChoice,
    DoctorRef,
    SurgeryCandidate,
    SurgerySnapshot,
    available_doctors,
    check_conflict,
    day_window,
    format_conflict_message,
    mark_selected,
    parse_doctor_ids,
    parse_surgery_date,
)

__all__ = [
    'NO_CONFLICT',
    'Clash',
    'ConflictResult',
    'DoctorChoice',
    'DoctorRef',
    'SurgeryCandidate',
    'SurgerySnapshot',
    'available_doctors',
    'check_conflict',
    'day_window',
    'format_conflict_message',
    'mark_selected',
    'parse_doctor_ids',
    'parse_surgery_date',
]
