"""
Tests for the server-rendered catalog pages.
"""

from datetime import datetime, timezone as dt_timezone

from django.test import TestCase, override_settings
from django.urls import reverse

from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.models import Surgery


@override_settings(TIME_ZONE='UTC')
class CatalogViewTests(TestCase):
    databases = {'default'}

    def setUp(self):
        self.client.defaults['HTTP_HOST'] = 'localhost'
        self.berger = Doctor.objects.create(
            first_name='Anna', family_name='Berger', expertise=['Cardiology'], gender=['female'],
        )
        self.hoffmann = Doctor.objects.create(
            first_name='Lukas', family_name='Hoffmann', expertise=['Trauma'], gender=['male'],
        )
        self.patient = Patient.objects.create(first_name='Emma', family_name='Albrecht', diagnosis='Appendicitis')
        self.booked = Surgery.objects.create(
            title='Bypass',
            summary='Double bypass.',
            date=datetime(2024, 3, 1, 9, tzinfo=dt_timezone.utc),
            patient=self.patient,
            active=True,
        )
        self.booked.doctors.set([self.berger])

    def surgery_post(self, **overrides):
        data = {
            'title': 'Appendectomy',
            'summary': 'Laparoscopic.',
            'date': '2024-03-01T14:00',
            'patient': str(self.patient.id),
            'doctors': [str(self.hoffmann.id)],
            'active': 'on',
        }
        data.update(overrides)
        return data

    def test_root_redirects_browsers_to_catalog(self):
        r = self.client.get('/', HTTP_ACCEPT='text/html')
        self.assertRedirects(r, reverse('catalog:index'))

        r = self.client.get('/')
        self.assertContains(r, 'Hospital records backend is running.')

    def test_index_shows_counts(self):
        r = self.client.get(reverse('catalog:index'))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.context['surgery_count'], 1)
        self.assertEqual(r.context['surgery_active_count'], 1)
        self.assertEqual(r.context['doctor_count'], 2)
        self.assertEqual(r.context['patient_count'], 1)

    def test_create_form_offers_only_available_doctors(self):
        r = self.client.get(reverse('catalog:surgery_create'))
        self.assertEqual(r.status_code, 200)
        self.assertEqual([c.doctor for c in r.context['doctor_choices']], [self.hoffmann])
        self.assertFalse(r.context['doctor_choices'][0].checked)

    def test_create_surgery_redirects_to_detail(self):
        r = self.client.post(reverse('catalog:surgery_create'), self.surgery_post())

        surgery = Surgery.objects.get(title='Appendectomy')
        self.assertRedirects(r, surgery.get_absolute_url())
        self.assertTrue(surgery.active)
        self.assertEqual(list(surgery.doctors.all()), [self.hoffmann])

    def test_create_conflict_rerenders_form_with_message(self):
        r = self.client.post(
            reverse('catalog:surgery_create'),
            self.surgery_post(doctors=[str(self.berger.id), str(self.hoffmann.id)]),
        )

        self.assertEqual(r.status_code, 200)
        self.assertContains(r, 'Doctor Berger, Anna already has an active surgery on 2024-03-01.')
        self.assertFalse(Surgery.objects.filter(title='Appendectomy').exists())

    def test_create_requires_doctors(self):
        r = self.client.post(reverse('catalog:surgery_create'), self.surgery_post(doctors=[]))
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.context['form'].errors['doctors'])

    def test_update_form_prechecks_surgery_doctors(self):
        r = self.client.get(reverse('catalog:surgery_update', args=[self.booked.id]))

        self.assertEqual(r.status_code, 200)
        choices = r.context['doctor_choices']
        self.assertEqual([c.doctor for c in choices], [self.berger, self.hoffmann])
        self.assertEqual([c.checked for c in choices], [True, False])

    def test_update_keeps_own_day(self):
        r = self.client.post(
            reverse('catalog:surgery_update', args=[self.booked.id]),
            self.surgery_post(title='Bypass (revised)', doctors=[str(self.berger.id)]),
        )
        self.assertRedirects(r, self.booked.get_absolute_url())
        self.booked.refresh_from_db()
        self.assertEqual(self.booked.title, 'Bypass (revised)')

    def test_surgery_list_filters(self):
        other = Surgery.objects.create(
            title='Arthroscopy',
            summary='Knee.',
            date=datetime(2024, 3, 2, 9, tzinfo=dt_timezone.utc),
            patient=self.patient,
        )
        other.doctors.set([self.hoffmann])

        r = self.client.get(reverse('catalog:surgery_list'))
        self.assertEqual(list(r.context['surgeries']), [self.booked, other])

        r = self.client.get(reverse('catalog:surgery_list'), {'date': '2024-03-02'})
        self.assertEqual(list(r.context['surgeries']), [other])

        r = self.client.get(reverse('catalog:surgery_list'), {'active': 'on'})
        self.assertEqual(list(r.context['surgeries']), [self.booked])

        r = self.client.get(reverse('catalog:surgery_list'), {'doctor': [self.hoffmann.id]})
        self.assertEqual(list(r.context['surgeries']), [other])

    def test_surgery_delete_removes_the_surgery(self):
        r = self.client.post(reverse('catalog:surgery_delete', args=[self.booked.id]))

        self.assertRedirects(r, reverse('catalog:surgery_list'))
        self.assertFalse(Surgery.objects.exists())
        self.assertEqual(Doctor.objects.count(), 2)

    def test_doctor_delete_blocked_while_linked(self):
        r = self.client.post(reverse('catalog:doctor_delete', args=[self.berger.id]))

        self.assertEqual(r.status_code, 409)
        self.assertContains(r, 'Bypass', status_code=409)
        self.assertTrue(Doctor.objects.filter(id=self.berger.id).exists())

        r = self.client.post(reverse('catalog:doctor_delete', args=[self.hoffmann.id]))
        self.assertRedirects(r, reverse('catalog:doctor_list'))

    def test_patient_delete_blocked_while_linked(self):
        r = self.client.post(reverse('catalog:patient_delete', args=[self.patient.id]))
        self.assertEqual(r.status_code, 409)
        self.assertTrue(Patient.objects.exists())

    def test_doctor_create_form(self):
        r = self.client.post(
            reverse('catalog:doctor_create'),
            {'first_name': 'Mira', 'family_name': 'Schulz', 'expertise': 'Neurosurgery, Spine', 'gender': 'female'},
        )
        doctor = Doctor.objects.get(family_name='Schulz')
        self.assertRedirects(r, doctor.get_absolute_url())
        self.assertEqual(doctor.expertise, ['Neurosurgery', 'Spine'])

    def test_doctor_form_requires_tags(self):
        r = self.client.post(
            reverse('catalog:doctor_create'),
            {'first_name': 'Mira', 'family_name': 'Schulz', 'expertise': ' , ', 'gender': 'female'},
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn('expertise', r.context['form'].errors)

    def test_patient_form_rejects_death_before_birth(self):
        r = self.client.post(
            reverse('catalog:patient_create'),
            {
                'first_name': 'Theo',
                'family_name': 'Sommer',
                'date_of_birth': '1950-01-02',
                'date_of_death': '1949-01-01',
                'diagnosis': 'Carotid stenosis',
            },
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn('date_of_death', r.context['form'].errors)

    def test_detail_pages(self):
        self.assertContains(self.client.get(self.berger.get_absolute_url()), 'Bypass')
        self.assertContains(self.client.get(self.patient.get_absolute_url()), 'Berger, Anna')
        self.assertContains(self.client.get(self.booked.get_absolute_url()), 'Albrecht, Emma')
        self.assertContains(self.client.get(reverse('catalog:patient_list')), 'Albrecht, Emma')
        self.assertContains(self.client.get(reverse('catalog:doctor_list')), 'Hoffmann, Lukas')
