"""
Tests for the pure scheduling rules (no database).

Covers:
- check_conflict: active flag, calendar-day window, self-exclusion,
  doctor overlap, undated candidates, messages, idempotence
- available_doctors
- mark_selected
- parse_doctor_ids / parse_surgery_date
"""

from datetime import date, datetime, timezone as dt_timezone

from django.test import SimpleTestCase, override_settings

from hospital_backend.surgeries.exceptions import InvalidSchedulingData
from hospital_backend.surgeries.services.scheduling import (
    NO_CONFLICT,
    DoctorRef,
    SurgeryCandidate,
    SurgerySnapshot,
    available_doctors,
    check_conflict,
    day_window,
    format_conflict_message,
    mark_selected,
    parse_doctor_ids,
    parse_surgery_date,
)

UTC = dt_timezone.utc

D1 = DoctorRef(id=1, name='Berger, Anna')
D2 = DoctorRef(id=2, name='Hoffmann, Lukas')
D3 = DoctorRef(id=3, name='Schulz, Mira')
D4 = DoctorRef(id=4, name='Wagner, Jonas')


def at(year, month, day, hour=10, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=UTC)


def surgery(surgery_id, when, *doctors, active=True):
    return SurgerySnapshot(id=surgery_id, date=when, active=active, doctors=tuple(doctors))


def candidate(*doctor_ids, when=None, active=True, surgery_id=None):
    return SurgeryCandidate(doctor_ids=frozenset(doctor_ids), date=when, active=active, id=surgery_id)


@override_settings(TIME_ZONE='UTC')
class CheckConflictTests(SimpleTestCase):

    def test_inactive_candidate_never_conflicts(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1), active=False), existing)
        self.assertFalse(result.has_conflict)
        self.assertEqual(result, NO_CONFLICT)

    def test_same_day_same_doctor_conflicts(self):
        existing = [surgery(10, at(2024, 3, 1, 8), D1, D2)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1, 15)), existing)

        self.assertTrue(result.has_conflict)
        self.assertEqual(result.doctor_names, ['Berger, Anna'])
        self.assertEqual(result.surgery_ids, [10])

    def test_different_day_does_not_conflict(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 2)), existing)
        self.assertFalse(result.has_conflict)

    def test_window_is_whole_calendar_day(self):
        existing = [
            surgery(10, at(2024, 3, 1, 0, 0), D1),
            surgery(11, at(2024, 3, 2, 0, 0), D1),
            surgery(12, at(2024, 2, 29, 23, 59), D1),
        ]
        result = check_conflict(candidate(1, when=at(2024, 3, 1, 23, 30)), existing)
        self.assertEqual(result.surgery_ids, [10])

    def test_update_excludes_itself(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1), surgery_id=10), existing)
        self.assertFalse(result.has_conflict)

    def test_update_still_sees_other_surgeries(self):
        existing = [surgery(10, at(2024, 3, 1), D1), surgery(11, at(2024, 3, 1, 14), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1), surgery_id=10), existing)
        self.assertEqual(result.surgery_ids, [11])

    def test_disjoint_doctors_do_not_conflict(self):
        existing = [surgery(10, at(2024, 3, 1), D2)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1)), existing)
        self.assertFalse(result.has_conflict)

    def test_inactive_stored_surgery_is_ignored(self):
        existing = [surgery(10, at(2024, 3, 1), D1, active=False)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1)), existing)
        self.assertFalse(result.has_conflict)

    def test_undated_candidate_compares_against_all_dates(self):
        existing = [
            surgery(10, at(1999, 12, 31), D1),
            surgery(11, at(2030, 6, 1), D2),
            surgery(12, at(2030, 6, 2), D3),
        ]
        result = check_conflict(candidate(1, 2, when=None), existing)

        self.assertTrue(result.has_conflict)
        self.assertEqual(result.surgery_ids, [10, 11])
        self.assertIn('an unspecified date', result.message)

    def test_conflict_names_only_shared_doctors_sorted_by_name(self):
        existing = [
            surgery(10, at(2024, 3, 1), D4, D3),
            surgery(11, at(2024, 3, 1, 16), D1, D2),
        ]
        result = check_conflict(candidate(4, 1, when=at(2024, 3, 1)), existing)

        self.assertEqual(result.doctor_names, ['Berger, Anna', 'Wagner, Jonas'])
        self.assertEqual(
            result.message,
            'Doctors Berger, Anna; Wagner, Jonas already have active surgeries on 2024-03-01.',
        )

    def test_single_doctor_message(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1)), existing)
        self.assertEqual(result.message, 'Doctor Berger, Anna already has an active surgery on 2024-03-01.')

    def test_candidate_without_doctors_never_conflicts(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        self.assertFalse(check_conflict(candidate(when=at(2024, 3, 1)), existing).has_conflict)

    def test_is_idempotent(self):
        existing = [surgery(10, at(2024, 3, 1), D1, D2), surgery(11, at(2024, 3, 1), D3)]
        cand = candidate(1, 3, when=at(2024, 3, 1))
        self.assertEqual(check_conflict(cand, existing), check_conflict(cand, existing))

    def test_to_dict_and_conflicts(self):
        existing = [surgery(10, at(2024, 3, 1), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 1)), existing)

        payload = result.to_dict()
        self.assertTrue(payload['conflict'])
        self.assertEqual(payload['doctors'], [{'id': 1, 'name': 'Berger, Anna'}])
        self.assertEqual(payload['surgery_ids'], [10])

        conflicts = result.to_conflicts()
        self.assertEqual(len(conflicts), 1)
        self.assertEqual(
            conflicts[0].to_dict(),
            {'id': 10, 'doctor_id': 1, 'message': 'Doctor Berger, Anna is in active surgery #10'},
        )
        self.assertEqual(conflicts[0].doctor_id, 1)

    def test_no_conflict_to_dict(self):
        self.assertEqual(
            NO_CONFLICT.to_dict(),
            {'conflict': False, 'message': '', 'doctors': [], 'surgery_ids': []},
        )


@override_settings(TIME_ZONE='Europe/Berlin')
class LocalCalendarDayTests(SimpleTestCase):
    """Days are taken in the configured time zone, not in UTC."""

    def test_late_utc_surgery_belongs_to_next_local_day(self):
        # 23:30 UTC on March 1st is 00:30 on March 2nd in Berlin.
        existing = [surgery(10, at(2024, 3, 1, 23, 30), D1)]
        result = check_conflict(candidate(1, when=at(2024, 3, 2, 9)), existing)
        self.assertEqual(result.surgery_ids, [10])

        result = check_conflict(candidate(1, when=at(2024, 3, 1, 9)), existing)
        self.assertFalse(result.has_conflict)

    def test_day_window_starts_at_local_midnight(self):
        start, end = day_window(date(2024, 3, 2))
        self.assertEqual(start.astimezone(UTC), at(2024, 3, 1, 23, 0))
        self.assertEqual(end.astimezone(UTC), at(2024, 3, 2, 23, 0))


class AvailableDoctorsTests(SimpleTestCase):

    def test_excludes_every_doctor_of_active_surgeries(self):
        active = [surgery(10, at(2024, 3, 1), D1), surgery(11, at(2024, 3, 5), D3)]
        self.assertEqual(available_doctors([D1, D2, D3, D4], active), [D2, D4])

    def test_excludes_all_doctors_not_only_the_first(self):
        active = [surgery(10, at(2024, 3, 1), D2, D3)]
        self.assertEqual(available_doctors([D1, D2, D3, D4], active), [D1, D4])

    def test_ignores_inactive_surgeries(self):
        stored = [surgery(10, at(2024, 3, 1), D1, active=False)]
        self.assertEqual(available_doctors([D1, D2], stored), [D1, D2])

    def test_keeps_input_order(self):
        self.assertEqual(available_doctors([D4, D2, D1], []), [D4, D2, D1])


class MarkSelectedTests(SimpleTestCase):

    def test_marks_selected_doctors_in_order(self):
        choices = mark_selected([D1, D2, D3], [3, '1'])
        self.assertEqual([c.doctor for c in choices], [D1, D2, D3])
        self.assertEqual([c.checked for c in choices], [True, False, True])

    def test_does_not_mutate_doctors(self):
        doctors = [D1, D2]
        mark_selected(doctors, [1])
        self.assertEqual(doctors, [D1, D2])
        self.assertFalse(hasattr(D1, 'checked'))

    def test_empty_selection(self):
        self.assertEqual([c.selected for c in mark_selected([D1, D2], [])], [False, False])


class ParsingTests(SimpleTestCase):

    def test_parse_doctor_ids_accepts_scalar_and_list(self):
        self.assertEqual(parse_doctor_ids('7'), [7])
        self.assertEqual(parse_doctor_ids(7), [7])
        self.assertEqual(parse_doctor_ids(['3', 1, '3']), [3, 1])
        self.assertEqual(parse_doctor_ids([{'id': 2}, {'id': '5'}]), [2, 5])
        self.assertEqual(parse_doctor_ids(None), [])
        self.assertEqual(parse_doctor_ids(''), [])

    def test_parse_doctor_ids_rejects_garbage(self):
        with self.assertRaises(InvalidSchedulingData) as ctx:
            parse_doctor_ids(['1', 'abc'])
        self.assertEqual(ctx.exception.field, 'doctors')

        with self.assertRaises(InvalidSchedulingData):
            parse_doctor_ids([True])

    @override_settings(TIME_ZONE='UTC')
    def test_parse_surgery_date(self):
        self.assertEqual(parse_surgery_date('2024-03-01'), at(2024, 3, 1, 0))
        self.assertEqual(parse_surgery_date('2024-03-01T10:00:00Z'), at(2024, 3, 1, 10))
        self.assertEqual(parse_surgery_date(date(2024, 3, 1)), at(2024, 3, 1, 0))
        self.assertIsNone(parse_surgery_date(''))
        self.assertIsNone(parse_surgery_date(None))

    def test_parse_surgery_date_rejects_garbage(self):
        for value in ('yesterday', '2024-13-45'):
            with self.assertRaises(InvalidSchedulingData) as ctx:
                parse_surgery_date(value)
            self.assertEqual(ctx.exception.field, 'date')

    def test_format_conflict_message_for_plain_date(self):
        self.assertEqual(
            format_conflict_message(['Berger, Anna'], date(2024, 3, 1)),
            'Doctor Berger, Anna already has an active surgery on 2024-03-01.',
        )
