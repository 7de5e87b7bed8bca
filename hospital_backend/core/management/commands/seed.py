"""
Seed command: creates reproducible demo data.

Usage:
    python manage.py seed           # seed doctors, patients and surgeries
    python manage.py seed --flush   # delete all records first, then seed
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from hospital_backend.doctors.seeders import seed_doctors
from hospital_backend.patients.seeders import seed_patients
from hospital_backend.surgeries.seeders import flush_surgeries, seed_surgeries


class Command(BaseCommand):
    help = 'Seed database with demo doctors, patients and surgeries'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush',
            action='store_true',
            help='Delete all doctors, patients and surgeries before seeding.',
        )

    def handle(self, *args, **options):
        flush = options.get('flush', False)

        self.stdout.write('=' * 60)
        self.stdout.write('  Hospital records seed')
        self.stdout.write('=' * 60)

        try:
            with transaction.atomic():
                stats = {}

                if flush:
                    # Surgeries reference doctors and patients.
                    flush_surgeries()

                self.stdout.write('\n[1/3] Seeding doctors...')
                doctor_stats = seed_doctors(flush=flush)
                stats.update(doctor_stats)
                self._print_stats(doctor_stats)

                self.stdout.write('\n[2/3] Seeding patients...')
                patient_stats = seed_patients(flush=flush)
                stats.update(patient_stats)
                self._print_stats(patient_stats)

                self.stdout.write('\n[3/3] Seeding surgeries...')
                surgery_stats = seed_surgeries()
                stats.update(surgery_stats)
                self._print_stats(surgery_stats)

                self.stdout.write('\n' + '=' * 60)
                self.stdout.write(self.style.SUCCESS('  Seeding finished'))
                self.stdout.write('=' * 60)
                self._print_summary(stats)

        except Exception as e:
            self.stderr.write(f'\nSeeding failed: {e}')
            raise

    def _print_stats(self, stats):
        for key, value in stats.items():
            self.stdout.write(f'  - {key}: {value}')

    def _print_summary(self, stats):
        self.stdout.write('\nRecords (total):')
        for key, value in sorted(stats.items()):
            self.stdout.write(f'  * {key}: {value}')
