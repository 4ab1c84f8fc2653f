""" Tests for the grading celery tasks. """
import datetime
from unittest.mock import patch

from django.db import DatabaseError
from freezegun import freeze_time
from pytest import raises
from pytz import UTC

from tycoon.grading.errors import GradingInternalError, GradingNotFoundError
from tycoon.grading.models import Grade
from tycoon.grading.tasks import calculate_grades_task, complete_expired_assignments_task
from tycoon.grading.test.test_grades import invest_in
from tycoon.roster.errors import RosterInternalError
from tycoon.test_utils import CacheResetTest
from tycoon.tests.factories import AssignmentFactory, SubmissionFactory


class TestGradingTasks(CacheResetTest):
    """ The tasks run the grading API in-process when applied eagerly. """

    def test_calculate_grades_task(self):
        submission = SubmissionFactory()
        invest_in(submission, [45, 42, 41])

        grades = calculate_grades_task.apply(args=[submission.assignment_id]).get()

        self.assertEqual(len(grades), 1)
        self.assertEqual(Grade.objects.get(team=submission.team).grade, "high")

    @freeze_time("2026-02-10")
    def test_complete_expired_assignments_task(self):
        assignment = AssignmentFactory(
            is_evaluation_active=True, evaluation_due_date=datetime.datetime(2026, 2, 9, tzinfo=UTC)
        )
        SubmissionFactory(assignment=assignment)

        completed = complete_expired_assignments_task.apply().get()

        self.assertEqual([entry["id"] for entry in completed], [assignment.id])
        self.assertEqual(Grade.objects.get(assignment=assignment).grade, "incomplete")

    def test_only_internal_errors_are_retried(self):
        self.assertEqual(calculate_grades_task.autoretry_for, (GradingInternalError, DatabaseError))
        self.assertEqual(complete_expired_assignments_task.autoretry_for, (RosterInternalError, DatabaseError))

    @patch('tycoon.grading.api.grades.calculate_grades')
    def test_missing_assignment_is_not_retried(self, mock_calculate):
        mock_calculate.side_effect = GradingNotFoundError("No assignment found with id 98765")

        result = calculate_grades_task.apply(args=[98765])

        self.assertEqual(mock_calculate.call_count, 1)
        with raises(GradingNotFoundError):
            result.get()
