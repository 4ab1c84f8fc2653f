"""Public interface for interest accrual.

Students earn interest on the tokens they invested, at a rate that depends
on how the team they backed performed relative to the other teams of the
assignment. A student's accumulated interest turns into a bonus on their own
grade, capped at 20%.

"""
import logging
import math

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Sum

from tycoon.evaluation.models import Investment
from tycoon.grading.api.base import completed_investments_by_team, trimmed_mean
from tycoon.grading.errors import GradingInternalError
from tycoon.grading.models import Grade, InterestRecord
from tycoon.grading.serializers import InterestRecordSerializer

logger = logging.getLogger("tycoon.grading.api.interest")  # pylint: disable=invalid-name

DEFAULT_INTEREST_RATES = {
    Grade.BANDS.high: 0.20,
    Grade.BANDS.median: 0.10,
    Grade.BANDS.low: 0.05,
    Grade.BANDS.incomplete: 0.0,
}

MAX_INTEREST_BONUS = 0.20


def interest_rate(tier):
    """The interest rate paid for a team in the given performance tier."""
    rates = getattr(settings, "TYCOON_INTEREST_RATES", DEFAULT_INTEREST_RATES)
    return rates.get(tier, 0.0)


def team_performance_tiers(assignment_id):
    """
    Rank the teams of an assignment into thirds by trimmed-mean investment.

    The top third of teams is "high", the middle third "median" and the
    rest "low". Teams nobody invested in are not ranked; callers should
    treat a missing team as "incomplete".

    Args:
        assignment_id (int): The assignment.

    Returns:
        dict: team id -> tier

    """
    averages = [
        (trimmed_mean(tokens)[0], team_id)
        for team_id, tokens in completed_investments_by_team(assignment_id).items()
        if tokens
    ]
    averages.sort(key=lambda item: (-item[0], item[1]))

    total = len(averages)
    tiers = {}
    for index, (__, team_id) in enumerate(averages):
        if index < math.ceil(total / 3):
            tiers[team_id] = Grade.BANDS.high
        elif index < math.ceil(total * 2 / 3):
            tiers[team_id] = Grade.BANDS.median
        else:
            tiers[team_id] = Grade.BANDS.low
    return tiers


def calculate_student_interest(student_id, assignment_id, tiers=None):
    """
    Record the interest a student earned on each of their investments.

    interest = tokens invested x rate of the team's tier. Recalculating
    overwrites the previous records.

    Args:
        student_id (str): The investing student.
        assignment_id (int): The assignment.

    Keyword Args:
        tiers (dict): Precomputed output of `team_performance_tiers`.

    Returns:
        float: Total interest earned in this assignment.

    Raises:
        GradingInternalError: The records could not be written.

    """
    if tiers is None:
        tiers = team_performance_tiers(assignment_id)

    total = 0.0
    try:
        with transaction.atomic():
            investments = Investment.objects.filter(assignment_id=assignment_id, investor_id=student_id)
            for investment in investments:
                tier = tiers.get(investment.team_id, Grade.BANDS.incomplete)
                interest = investment.tokens * interest_rate(tier)
                InterestRecord.objects.update_or_create(
                    student_id=student_id,
                    assignment_id=assignment_id,
                    team_id=investment.team_id,
                    defaults={
                        "tokens_invested": investment.tokens,
                        "performance_tier": tier,
                        "interest_earned": interest,
                    }
                )
                total += interest
    except DatabaseError as ex:
        error_message = f"An error occurred while calculating interest for {student_id} on assignment {assignment_id}"
        logger.exception(error_message)
        raise GradingInternalError(error_message) from ex

    return total


def calculate_interest_for_assignment(assignment_id):
    """
    Recalculate interest for every student who invested in the assignment.

    Returns:
        dict: student id -> interest earned in the assignment

    """
    tiers = team_performance_tiers(assignment_id)
    investor_ids = (
        Investment.objects.filter(assignment_id=assignment_id)
        .order_by("investor_id")
        .values_list("investor_id", flat=True)
        .distinct()
    )
    earned = {
        investor_id: calculate_student_interest(investor_id, assignment_id, tiers=tiers)
        for investor_id in investor_ids
    }
    logger.info("Calculated interest for %d students on assignment %s", len(earned), assignment_id)
    return earned


def get_total_student_interest(student_id):
    """
    Sum a student's interest across all assignments and convert it to a bonus.

    The bonus is the total interest divided by 100, capped at 0.20.

    Returns:
        dict: "total_interest", "bonus_percentage" (a fraction, at most
            0.20) and "max_bonus" (the cap in percent).

    Examples:
        >>> get_total_student_interest("alice")
        {'total_interest': 2500.0, 'bonus_percentage': 0.2, 'max_bonus': 20}

    """
    total = InterestRecord.objects.filter(student_id=student_id).aggregate(
        total=Sum("interest_earned")
    )["total"] or 0.0
    return {
        "total_interest": total,
        "bonus_percentage": min(total / 100, MAX_INTEREST_BONUS),
        "max_bonus": int(MAX_INTEREST_BONUS * 100),
    }


def get_student_interest_records(student_id, assignment_id=None):
    """
    Retrieve a student's interest records, optionally for one assignment.
    """
    records = InterestRecord.objects.filter(student_id=student_id)
    if assignment_id is not None:
        records = records.filter(assignment_id=assignment_id)
    return InterestRecordSerializer(records.order_by("assignment_id", "team_id"), many=True).data
