""" Tests for the tycoon REST API. """
import datetime
from unittest.mock import patch

import ddt
from django.urls import reverse
from freezegun import freeze_time
from pytz import UTC
from rest_framework import status
from rest_framework.test import APIClient

from tycoon.evaluation.errors import EvaluationInternalError
from tycoon.evaluation.models import EvaluationAssignment, Investment
from tycoon.grading.models import Grade, InterestRecord
from tycoon.grading.test.test_grades import invest_in
from tycoon.test_utils import CacheResetTest
from tycoon.tests.factories import (AssignmentFactory, EvaluationAssignmentFactory, GradeFactory, StaffFactory,
                                    SubmissionFactory, TeamFactory, UserFactory)


class APITestCase(CacheResetTest):
    """ Sets up an API client logged in as staff, and a student. """

    def setUp(self):
        super().setUp()
        self.staff = StaffFactory()
        self.student = UserFactory()
        self.client = APIClient()
        self.client.force_authenticate(user=self.staff)

    def as_student(self):
        self.client.force_authenticate(user=self.student)

    @property
    def student_id(self):
        return str(self.student.pk)


@ddt.ddt
class TestPermissions(APITestCase):
    """ Admin routes are closed to students, every route to anonymous callers. """

    ADMIN_ROUTES = (
        ('get', 'tycoon-distribute', {'assignment_id': 1}),
        ('post', 'tycoon-distribute', {'assignment_id': 1}),
        ('post', 'tycoon-calculate-grades', {'assignment_id': 1}),
        ('get', 'tycoon-evaluation-status', {'assignment_id': 1}),
        ('post', 'tycoon-auto-complete', {}),
        ('get', 'tycoon-grades', {}),
        ('put', 'tycoon-grade-detail', {'grade_id': 1}),
        ('post', 'tycoon-grades-bulk', {}),
    )

    @ddt.data(*ADMIN_ROUTES)
    @ddt.unpack
    def test_student_forbidden(self, method, name, kwargs):
        self.as_student()
        response = getattr(self.client, method)(reverse(name, kwargs=kwargs), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @ddt.data('tycoon-investments', 'tycoon-evaluations', 'tycoon-interest', 'tycoon-student-grades')
    def test_anonymous_forbidden(self, name):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse(name))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class TestDistributeView(APITestCase):
    """ Distributing evaluations over HTTP. """

    def setUp(self):
        super().setUp()
        self.assignment = AssignmentFactory()
        for members in (["a1", "a2"], ["b1", "b2"], ["c1"]):
            SubmissionFactory(assignment=self.assignment, team=TeamFactory(assignment=self.assignment, members=members))
        self.url = reverse('tycoon-distribute', kwargs={'assignment_id': self.assignment.id})

    def test_distribute(self):
        self.assertFalse(self.client.get(self.url).data['data']['is_distributed'])

        response = self.client.post(self.url, {'evaluations_per_student': 2}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(
            response.data['data'],
            {'assignment_id': self.assignment.id, 'total_evaluations': 10, 'evaluations_per_student': 2},
        )
        self.assertTrue(self.client.get(self.url).data['data']['is_distributed'])

    def test_distribute_twice(self):
        self.client.post(self.url, {'evaluations_per_student': 1}, format='json')
        response = self.client.post(self.url, {'evaluations_per_student': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'conflict')
        self.assertEqual(EvaluationAssignment.objects.count(), 5)

    def test_insufficient_teams(self):
        response = self.client.post(self.url, {'evaluations_per_student': 3}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(EvaluationAssignment.objects.exists())

    def test_invalid_count(self):
        response = self.client.post(self.url, {'evaluations_per_student': 11}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_assignment(self):
        response = self.client.post(reverse('tycoon-distribute', kwargs={'assignment_id': 98765}), format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'not_found')

    @patch('tycoon.api.views.distribution_api.distribute')
    def test_internal_error(self, mock_distribute):
        mock_distribute.side_effect = EvaluationInternalError("Bad things happened")
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'internal_error', 'message': 'Bad things happened'})


class TestGradeViews(APITestCase):
    """ Calculating, reviewing and publishing grades over HTTP. """

    def setUp(self):
        super().setUp()
        self.assignment = AssignmentFactory()
        self.submission = SubmissionFactory(
            assignment=self.assignment,
            team=TeamFactory(assignment=self.assignment, members=[str(self.student.pk)]),
        )
        invest_in(self.submission, [50, 45, 40])

    def test_calculate_grades(self):
        url = reverse('tycoon-calculate-grades', kwargs={'assignment_id': self.assignment.id})

        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['grades'][0]['grade'], 'high')
        self.assertEqual(response.data['data']['statistics']['high_grades'], 1)
        self.assertEqual(self.client.get(url).data['data']['statistics']['total_teams'], 1)

    def test_calculate_without_submissions(self):
        url = reverse('tycoon-calculate-grades', kwargs={'assignment_id': AssignmentFactory().id})
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_grades(self):
        GradeFactory(submission=self.submission)
        response = self.client.get(reverse('tycoon-grades'), {'assignment_id': self.assignment.id})
        self.assertEqual(len(response.data['data']['grades']), 1)
        self.assertEqual(response.data['data']['statistics']['median_grades'], 1)

    def test_list_grades_requires_assignment(self):
        response = self.client.get(reverse('tycoon-grades'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'bad_request')

    def test_override_and_publish(self):
        grade = GradeFactory(submission=self.submission)
        url = reverse('tycoon-grade-detail', kwargs={'grade_id': grade.id})

        response = self.client.put(url, {'grade': 'high', 'percentage': 97, 'status': 'published'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        grade.refresh_from_db()
        self.assertEqual((grade.grade, grade.percentage, grade.status), ('high', 97, 'published'))
        self.assertTrue(grade.manual_override)
        self.assertEqual(grade.reviewed_by, self.staff.username)

        self.as_student()
        mine = self.client.get(reverse('tycoon-student-grades'))
        self.assertEqual([entry['id'] for entry in mine.data['data']], [grade.id])

    def test_override_validation(self):
        grade = GradeFactory(submission=self.submission)
        url = reverse('tycoon-grade-detail', kwargs={'grade_id': grade.id})
        response = self.client.put(url, {'percentage': 140}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_override_missing_grade(self):
        response = self.client.put(
            reverse('tycoon-grade-detail', kwargs={'grade_id': 98765}), {'grade': 'low'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_bulk_publish(self):
        grade = GradeFactory(submission=self.submission)
        response = self.client.post(
            reverse('tycoon-grades-bulk'), {'grade_ids': [grade.id], 'action': 'publish'}, format='json'
        )
        self.assertEqual(response.data['data'], {'updated': 1, 'action': 'publish'})
        self.assertEqual(Grade.objects.get(pk=grade.id).status, 'published')

    def test_bulk_invalid_action(self):
        response = self.client.post(
            reverse('tycoon-grades-bulk'), {'grade_ids': [1], 'action': 'delete'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_evaluation_status(self):
        response = self.client.get(
            reverse('tycoon-evaluation-status', kwargs={'assignment_id': self.assignment.id})
        )
        self.assertEqual(response.data['data']['total_completed'], 3)

    @freeze_time("2026-02-10")
    def test_auto_complete(self):
        self.assignment.is_evaluation_active = True
        self.assignment.evaluation_due_date = datetime.datetime(2026, 2, 9, tzinfo=UTC)
        self.assignment.save()

        response = self.client.post(reverse('tycoon-auto-complete'))

        self.assertEqual(response.data['data']['count'], 1)
        self.assertTrue(Grade.objects.filter(assignment=self.assignment).exists())


class TestStudentViews(APITestCase):
    """ Investing and checking results as a student. """

    def setUp(self):
        super().setUp()
        self.as_student()
        self.assignment = AssignmentFactory(is_evaluation_active=True)
        self.submission = SubmissionFactory(assignment=self.assignment)
        EvaluationAssignmentFactory(submission=self.submission, evaluator_id=self.student_id)
        self.url = reverse('tycoon-investments')

    def test_invest(self):
        response = self.client.post(
            self.url,
            {'assignment_id': self.assignment.id, 'team_id': self.submission.team_id, 'tokens': 30},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['remaining_tokens'], 70)
        self.assertEqual(Investment.objects.get().investor_id, self.student_id)

        listing = self.client.get(self.url, {'assignment_id': self.assignment.id})
        self.assertEqual(len(listing.data['data']['investments']), 1)

    def test_invest_too_much(self):
        response = self.client.post(
            self.url,
            {'assignment_id': self.assignment.id, 'team_id': self.submission.team_id, 'tokens': 60},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Investment.objects.exists())

    def test_invest_unassigned_team(self):
        other = SubmissionFactory(assignment=self.assignment)
        response = self.client.post(
            self.url,
            {'assignment_id': self.assignment.id, 'team_id': other.team_id, 'tokens': 10},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invest_missing_fields(self):
        response = self.client.post(self.url, {'tokens': 10}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_evaluations(self):
        response = self.client.get(reverse('tycoon-evaluations'), {'assignment_id': self.assignment.id})
        self.assertEqual([entry['evaluated_team'] for entry in response.data['data']], [self.submission.team_id])

    def test_interest(self):
        InterestRecord.objects.create(
            student_id=self.student_id,
            assignment=self.assignment,
            team=self.submission.team,
            tokens_invested=50,
            performance_tier='high',
            interest_earned=10.0,
        )
        response = self.client.get(reverse('tycoon-interest'))
        self.assertEqual(response.data['data']['total_interest'], 10.0)
        self.assertEqual(response.data['data']['bonus_percentage'], 0.1)
        self.assertEqual(len(response.data['data']['records']), 1)
