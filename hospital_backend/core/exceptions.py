"""
Shared exceptions and the REST exception handler.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class RecordInUseError(Exception):
    """
    Raised when a doctor or patient cannot be deleted because surgeries
    still reference it.

    Attributes:
        object_type: 'doctor' or 'patient'
        object_id: ID of the record that was to be deleted
        surgery_ids: IDs of the surgeries that block the deletion
    """
    def __init__(
        self,
        *,
        object_type: str,
        object_id: int,
        surgery_ids: list[int],
        message: str | None = None,
    ):
        self.object_type = object_type
        self.object_id = object_id
        self.surgery_ids = list(surgery_ids)
        if message is None:
            message = (
                f'{object_type.capitalize()} #{object_id} is referenced by '
                f'{len(self.surgery_ids)} surgery record(s) and cannot be deleted'
            )
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            'detail': str(self),
            'object_type': self.object_type,
            'object_id': self.object_id,
            'surgery_ids': self.surgery_ids,
        }


def api_exception_handler(exc, context):
    """DRF exception handler.

    DRF's own exceptions keep their default rendering. ``RecordInUseError``
    becomes HTTP 409. Anything else is logged and rendered as HTTP 500 with a
    JSON body instead of Django's HTML error page.
    """
    if isinstance(exc, RecordInUseError):
        return Response(exc.to_dict(), status=status.HTTP_409_CONFLICT)

    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception('Unhandled API error in %s', type(view).__name__ if view else 'unknown view')
    return Response(
        {'detail': str(exc) or exc.__class__.__name__, 'code': 'server_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
