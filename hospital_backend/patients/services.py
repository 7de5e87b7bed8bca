"""Patient write operations that need more than a serializer save."""

import logging

from django.db import transaction

from hospital_backend.core.exceptions import RecordInUseError
from hospital_backend.core.utils import log_action
from hospital_backend.patients.models import Patient

logger = logging.getLogger(__name__)


def delete_patient(patient: Patient) -> None:
    """Delete ``patient`` unless a surgery still references it.

    Raises:
        RecordInUseError: the patient has at least one surgery
    """
    patient_id = patient.id
    meta = {'name': patient.name}
    with transaction.atomic():
        list(Patient.objects.select_for_update().filter(id=patient_id))
        surgery_ids = list(patient.surgeries.order_by('id').values_list('id', flat=True))
        if surgery_ids:
            logger.info('Refusing to delete patient #%s: linked to surgeries %s', patient.id, surgery_ids)
            raise RecordInUseError(object_type='patient', object_id=patient.id, surgery_ids=surgery_ids)

        patient.delete()
    log_action('patient_delete', 'patient', patient_id, meta=meta)
