from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from unittest import mock

from django.db import transaction
from django.test import TestCase
from rest_framework.test import APIClient

from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.models import Surgery


class PatientApiTests(TestCase):
    databases = {'default'}

    def setUp(self):
        self.client = APIClient()
        self.client.defaults['HTTP_HOST'] = 'localhost'

    def make_patient(self, first_name, family_name, **extra):
        extra.setdefault('diagnosis', 'Appendicitis')
        return Patient.objects.create(first_name=first_name, family_name=family_name, **extra)

    def test_list_sorted_by_family_name(self):
        self.make_patient('Theo', 'Sommer')
        self.make_patient('Emma', 'Albrecht')
        self.make_patient('Max', 'Peters')

        r = self.client.get('/api/patients/')

        self.assertEqual(r.status_code, 200)
        self.assertEqual([p['family_name'] for p in r.data], ['Albrecht', 'Peters', 'Sommer'])

    def test_create_patient(self):
        r = self.client.post(
            '/api/patients/',
            {
                'first_name': 'Emma',
                'family_name': 'Albrecht',
                'date_of_birth': '1950-01-02',
                'date_of_death': '2020-11-23',
                'diagnosis': 'Gallstones',
            },
            format='json',
        )
        self.assertEqual(r.status_code, 201, r.data)
        patient = Patient.objects.get()
        self.assertEqual(patient.lifespan, 'January 2nd, 1950 - November 23rd, 2020')

    def test_diagnosis_is_required(self):
        r = self.client.post('/api/patients/', {'first_name': 'Emma', 'family_name': 'Albrecht'}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertIn('diagnosis', r.data)

    def test_death_before_birth_is_rejected(self):
        r = self.client.post(
            '/api/patients/',
            {
                'first_name': 'Emma',
                'family_name': 'Albrecht',
                'date_of_birth': '1950-01-02',
                'date_of_death': '1949-12-31',
                'diagnosis': 'Gallstones',
            },
            format='json',
        )
        self.assertEqual(r.status_code, 400)
        self.assertIn('date_of_death', r.data)

    def test_patch_checks_dates_against_stored_values(self):
        patient = self.make_patient('Emma', 'Albrecht', date_of_birth=datetime(1950, 1, 2).date())
        r = self.client.patch(f'/api/patients/{patient.id}/', {'date_of_death': '1949-01-01'}, format='json')
        self.assertEqual(r.status_code, 400)

        r = self.client.patch(f'/api/patients/{patient.id}/', {'treatment': 'Cholecystectomy'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['treatment'], 'Cholecystectomy')

    def test_put_and_patch_return_detail_shape(self):
        patient = self.make_patient('Emma', 'Albrecht')

        r = self.client.put(
            f'/api/patients/{patient.id}/',
            {'first_name': 'Emma', 'family_name': 'Bauer', 'diagnosis': 'Gallstones'},
            format='json',
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['id'], patient.id)
        self.assertEqual(r.data['name'], 'Bauer, Emma')
        self.assertEqual(r.data['surgeries'], [])

        r = self.client.patch(f'/api/patients/{patient.id}/', {'treatment': 'Cholecystectomy'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['id'], patient.id)
        self.assertIn('lifespan', r.data)
        self.assertEqual(r.data['surgeries'], [])

    def test_detail_and_delete_blocked_while_linked(self):
        patient = self.make_patient('Emma', 'Albrecht')
        doctor = Doctor.objects.create(first_name='Anna', family_name='Berger', expertise=['x'], gender=['f'])
        surgery = Surgery.objects.create(
            title='Appendectomy',
            summary='Laparoscopic.',
            date=datetime(2024, 3, 1, 10, tzinfo=dt_timezone.utc),
            patient=patient,
        )
        surgery.doctors.set([doctor])

        r = self.client.get(f'/api/patients/{patient.id}/')
        self.assertEqual(r.data['surgeries'][0]['doctor_names'], ['Berger, Anna'])

        r = self.client.delete(f'/api/patients/{patient.id}/')
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.data['surgery_ids'], [surgery.id])

        surgery.delete()
        r = self.client.delete(f'/api/patients/{patient.id}/')
        self.assertEqual(r.status_code, 204)
        self.assertFalse(Patient.objects.exists())

    def test_linked_check_and_delete_share_one_transaction(self):
        patient = self.make_patient('Emma', 'Albrecht')
        Surgery.objects.create(
            title='Appendectomy',
            summary='Laparoscopic.',
            date=datetime(2024, 3, 1, 10, tzinfo=dt_timezone.utc),
            patient=patient,
        )

        with mock.patch(
            'hospital_backend.patients.services.transaction.atomic',
            wraps=transaction.atomic,
        ) as atomic:
            r = self.client.delete(f'/api/patients/{patient.id}/')

        self.assertEqual(r.status_code, 409)
        self.assertIn(mock.call(), atomic.call_args_list)
        self.assertTrue(Surgery.objects.filter(patient=patient).exists())
