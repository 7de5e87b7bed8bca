import random
from datetime import date

from django.db import transaction

from .models import Doctor

RANDOM_SEED = 42

DOCTORS = [
    ('Anna', 'Berger', ['Cardiology'], ['female']),
    ('Lukas', 'Hoffmann', ['Orthopaedics', 'Trauma'], ['male']),
    ('Mira', 'Schulz', ['Neurosurgery'], ['female']),
    ('Jonas', 'Wagner', ['General Surgery'], ['male']),
    ('Sofia', 'Keller', ['Anaesthesiology'], ['female']),
    ('Elias', 'Brandt', ['Vascular Surgery'], ['male']),
    ('Lea', 'Vogel', ['Paediatric Surgery'], ['female']),
    ('Noah', 'Richter', ['Urology'], ['male']),
]


def seed_doctors(flush: bool = False) -> dict:
    """
    Seeds the demo doctors.

    With flush=True all doctors are deleted first; the caller must have
    removed the surgeries beforehand.
    """
    random.seed(RANDOM_SEED)

    with transaction.atomic():
        if flush:
            Doctor.objects.all().delete()

        doctors: list[Doctor] = []
        for first_name, family_name, expertise, gender in DOCTORS:
            obj, _ = Doctor.objects.get_or_create(
                first_name=first_name,
                family_name=family_name,
                defaults={
                    'date_of_birth': date(random.randint(1960, 1990), random.randint(1, 12), random.randint(1, 28)),
                    'expertise': expertise,
                    'gender': gender,
                },
            )
            doctors.append(obj)

    return {'doctors': len(doctors)}
