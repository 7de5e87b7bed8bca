"""Doctor write operations that need more than a serializer save."""

import logging

from django.db import transaction

from hospital_backend.core.exceptions import RecordInUseError
from hospital_backend.core.utils import log_action
from hospital_backend.doctors.models import Doctor

logger = logging.getLogger(__name__)


def delete_doctor(doctor: Doctor) -> None:
    """Delete ``doctor`` unless a surgery still lists it.

    Raises:
        RecordInUseError: the doctor is assigned to at least one surgery
    """
    doctor_id = doctor.id
    meta = {'name': doctor.name}
    with transaction.atomic():
        # Row lock held until commit; planning locks the same doctor rows.
        list(Doctor.objects.select_for_update().filter(id=doctor_id))
        surgery_ids = list(doctor.surgeries.order_by('id').values_list('id', flat=True))
        if surgery_ids:
            logger.info('Refusing to delete doctor #%s: linked to surgeries %s', doctor.id, surgery_ids)
            raise RecordInUseError(object_type='doctor', object_id=doctor.id, surgery_ids=surgery_ids)

        doctor.delete()
    log_action('doctor_delete', 'doctor', doctor_id, meta=meta)
