""" Tests for interest accrual. """
import ddt
from django.test.utils import override_settings
from pytest import approx

from tycoon.grading.api import interest as interest_api
from tycoon.grading.models import InterestRecord
from tycoon.grading.test.test_grades import invest_in
from tycoon.test_utils import CacheResetTest
from tycoon.tests.factories import AssignmentFactory, InvestmentFactory, SubmissionFactory


@ddt.ddt
class TestPerformanceTiers(CacheResetTest):
    """ Ranking teams into thirds. """

    def setUp(self):
        super().setUp()
        self.assignment = AssignmentFactory()

    @ddt.data(
        ([40, 30, 20], ["high", "median", "low"]),
        ([40, 30, 20, 10], ["high", "high", "median", "low"]),
        ([40, 30], ["high", "median"]),
        ([40], ["high"]),
        ([50, 40, 30, 20, 10, 5], ["high", "high", "median", "median", "low", "low"]),
    )
    @ddt.unpack
    def test_tiers(self, averages, expected):
        submissions = []
        for average in averages:
            submission = SubmissionFactory(assignment=self.assignment)
            invest_in(submission, [average])
            submissions.append(submission)

        tiers = interest_api.team_performance_tiers(self.assignment.id)

        self.assertEqual([tiers[submission.team_id] for submission in submissions], expected)

    def test_teams_without_investments_are_not_ranked(self):
        invested = SubmissionFactory(assignment=self.assignment)
        invest_in(invested, [20])
        skipped = SubmissionFactory(assignment=self.assignment)

        tiers = interest_api.team_performance_tiers(self.assignment.id)

        self.assertEqual(tiers, {invested.team_id: "high"})
        self.assertNotIn(skipped.team_id, tiers)


class TestStudentInterest(CacheResetTest):
    """ Interest earned on investments. """

    def setUp(self):
        super().setUp()
        self.assignment = AssignmentFactory()
        self.top, self.middle, self.bottom = [SubmissionFactory(assignment=self.assignment) for __ in range(3)]
        invest_in(self.top, [45])
        invest_in(self.middle, [30])
        invest_in(self.bottom, [10])

    def _back(self, submission, tokens):
        InvestmentFactory(assignment=self.assignment, team=submission.team, investor_id="alice", tokens=tokens)

    def test_interest_by_tier(self):
        self._back(self.top, 50)
        self._back(self.middle, 30)
        self._back(self.bottom, 20)

        total = interest_api.calculate_student_interest("alice", self.assignment.id)

        self.assertEqual(total, approx(50 * 0.20 + 30 * 0.10 + 20 * 0.05))
        records = {record.team_id: record for record in InterestRecord.objects.filter(student_id="alice")}
        self.assertEqual(records[self.top.team_id].performance_tier, "high")
        self.assertEqual(records[self.bottom.team_id].interest_earned, approx(1.0))

    def test_recalculation_overwrites(self):
        self._back(self.top, 50)
        interest_api.calculate_student_interest("alice", self.assignment.id)
        interest_api.calculate_student_interest("alice", self.assignment.id)
        self.assertEqual(InterestRecord.objects.filter(student_id="alice").count(), 1)

    def test_unranked_team_earns_nothing(self):
        unranked = SubmissionFactory(assignment=self.assignment)
        self._back(unranked, 40)
        self.assertEqual(interest_api.calculate_student_interest("alice", self.assignment.id), 0)
        self.assertEqual(InterestRecord.objects.get(student_id="alice").performance_tier, "incomplete")

    @override_settings(TYCOON_INTEREST_RATES={"high": 1.0, "median": 0.5, "low": 0.0, "incomplete": 0.0})
    def test_configured_rates(self):
        self._back(self.top, 50)
        self._back(self.middle, 10)
        self.assertEqual(interest_api.calculate_student_interest("alice", self.assignment.id), approx(55.0))

    def test_calculate_interest_for_assignment(self):
        self._back(self.top, 50)
        earned = interest_api.calculate_interest_for_assignment(self.assignment.id)
        self.assertEqual(len(earned), 4)
        self.assertEqual(earned["alice"], approx(10.0))

    def test_interest_records(self):
        self._back(self.top, 50)
        interest_api.calculate_student_interest("alice", self.assignment.id)
        records = interest_api.get_student_interest_records("alice", assignment_id=self.assignment.id)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["tokens_invested"], 50)
        self.assertEqual(interest_api.get_student_interest_records("alice", assignment_id=98765), [])


@ddt.ddt
class TestInterestBonus(CacheResetTest):
    """ Converting accumulated interest into a grade bonus. """

    @ddt.data(
        ([], 0.0, 0.0),
        ([10.0], 10.0, 0.10),
        ([5.0, 7.5], 12.5, 0.125),
        ([20.0], 20.0, 0.20),
        ([2000.0, 500.0], 2500.0, 0.20),
    )
    @ddt.unpack
    def test_total_interest(self, amounts, total, bonus):
        for amount in amounts:
            submission = SubmissionFactory()
            InterestRecord.objects.create(
                student_id="alice",
                assignment=submission.assignment,
                team=submission.team,
                tokens_invested=50,
                performance_tier="high",
                interest_earned=amount,
            )

        summary = interest_api.get_total_student_interest("alice")

        self.assertEqual(summary["total_interest"], approx(total))
        self.assertEqual(summary["bonus_percentage"], approx(bonus))
        self.assertEqual(summary["max_bonus"], 20)
