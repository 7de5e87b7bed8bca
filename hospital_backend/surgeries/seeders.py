import logging
import random
from datetime import datetime, time, timedelta

from django.db import transaction
from django.utils import timezone

from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient

from .exceptions import SchedulingConflictError
from .models import Surgery
from .services.planning import plan_surgery

logger = logging.getLogger(__name__)

RANDOM_SEED = 42
SURGERY_COUNT = 15
DAYS_AHEAD = 14


def flush_surgeries() -> None:
    Surgery.objects.all().delete()


def seed_surgeries(flush: bool = False) -> dict:
    """
    Seeds surgeries over the next two weeks.

    Every surgery goes through ``plan_surgery``, so the seed never
    double-books a doctor; candidates that would are skipped.
    """
    random.seed(RANDOM_SEED)
    stats = {'surgeries': 0, 'surgeries_skipped': 0}

    with transaction.atomic():
        if flush:
            flush_surgeries()

        doctors = list(Doctor.objects.all())
        patients = list(Patient.objects.all())
        if not doctors or not patients:
            return stats

        today = timezone.localdate()
        for index in range(SURGERY_COUNT):
            patient = random.choice(patients)
            team = random.sample(doctors, k=min(len(doctors), random.randint(1, 2)))
            day = today + timedelta(days=random.randint(0, DAYS_AHEAD))
            when = timezone.make_aware(datetime.combine(day, time(random.choice([8, 10, 13, 15]), 0)))
            data = {
                'title': f'{patient.treatment or "Surgery"} #{index + 1}',
                'summary': f'Planned treatment for {patient.diagnosis.lower()}.',
                'date': when,
                'patient': patient,
                'doctors': team,
                'active': random.random() < 0.6,
            }
            try:
                plan_surgery(data=data)
            except SchedulingConflictError as e:
                logger.debug('Seed surgery skipped: %s', e.message)
                stats['surgeries_skipped'] += 1
                continue
            stats['surgeries'] += 1

    return stats
