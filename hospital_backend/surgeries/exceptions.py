"""
Scheduling-specific exceptions for the surgeries app.

These exceptions are raised by the planning services and are translated to
DRF responses (or form errors) in the views.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Conflict:
    """A single double-booking: one doctor already in one active surgery."""
    id: int
    doctor_id: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'doctor_id': self.doctor_id,
            'message': self.message,
        }


class SchedulingError(Exception):
    """Base exception for all scheduling-related errors."""
    pass


class SchedulingConflictError(SchedulingError):
    """
    Raised when a surgery cannot be saved because it would double-book
    at least one doctor.

    Contains a list of Conflict objects describing each clash found.
    """
    def __init__(self, conflicts: list[Conflict], message: str = "Scheduling conflicts detected"):
        self.conflicts = conflicts
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            'detail': self.message,
            'conflicts': [c.to_dict() for c in self.conflicts],
        }


class InvalidSchedulingData(SchedulingError):
    """
    Raised when surgery data is malformed (no doctors, unknown patient,
    unparseable date, ...).
    """
    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = {'detail': str(self)}
        if self.field:
            result['field'] = self.field
        return result
