import logging
from datetime import date, datetime

from django.utils import timezone

from .models import AuditLog

logger = logging.getLogger(__name__)


def log_action(action, object_type='', object_id=None, meta=None):
    """Write a record-change action to the audit trail.

    A failing audit write is logged and swallowed; it never aborts the
    request that triggered it.
    """

    try:
        AuditLog.objects.create(
            action=action,
            object_type=object_type or '',
            object_id=object_id,
            meta=meta,
        )
    except Exception:
        logger.exception('AuditLog write failed (action=%s, %s=%s)', action, object_type, object_id)


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th')
    return f'{day}{suffix}'


def format_long_date(value: date | datetime | None) -> str:
    """Render a date as ``March 1st, 2024``; empty string for ``None``."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    return f'{value:%B} {_ordinal(value.day)}, {value.year}'


def format_iso_day(value: date | datetime | None) -> str:
    """Render the local calendar day as ``YYYY-MM-DD``; empty string for ``None``."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    return value.isoformat()
