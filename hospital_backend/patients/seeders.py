import random
from datetime import date

from django.db import transaction

from .models import Patient

RANDOM_SEED = 42

PATIENTS = [
    ('Emma', 'Albrecht', 'Appendicitis', 'Appendectomy'),
    ('Paul', 'Fischer', 'Torn meniscus', 'Arthroscopy'),
    ('Lina', 'Krause', 'Gallstones', 'Cholecystectomy'),
    ('Ben', 'Lorenz', 'Inguinal hernia', 'Hernia repair'),
    ('Clara', 'Meier', 'Coronary artery disease', 'Bypass surgery'),
    ('Felix', 'Neumann', 'Hip arthrosis', 'Hip replacement'),
    ('Ida', 'Otto', 'Cataract', 'Lens replacement'),
    ('Max', 'Peters', 'Kidney stones', 'Ureteroscopy'),
    ('Greta', 'Roth', 'Spinal stenosis', 'Decompression'),
    ('Theo', 'Sommer', 'Carotid stenosis', 'Endarterectomy'),
]


def seed_patients(flush: bool = False) -> dict:
    """
    Seeds the demo patients.

    With flush=True all patients are deleted first; the caller must have
    removed the surgeries beforehand.
    """
    random.seed(RANDOM_SEED)

    with transaction.atomic():
        if flush:
            Patient.objects.all().delete()

        patients: list[Patient] = []
        for first_name, family_name, diagnosis, treatment in PATIENTS:
            obj, _ = Patient.objects.get_or_create(
                first_name=first_name,
                family_name=family_name,
                defaults={
                    'date_of_birth': date(random.randint(1940, 2015), random.randint(1, 12), random.randint(1, 28)),
                    'diagnosis': diagnosis,
                    'treatment': treatment,
                },
            )
            patients.append(obj)

    return {'patients': len(patients)}
