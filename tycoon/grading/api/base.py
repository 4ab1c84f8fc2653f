"""
Scoring helpers shared by the grade and interest APIs.
"""
from collections import defaultdict

from django.conf import settings
from django.db.models import Exists, OuterRef

from tycoon.evaluation.models import EvaluationAssignment, Investment
from tycoon.grading.models import Grade

# Minimum number of investments before the extremes are dropped.
TRIM_THRESHOLD = 3

# (minimum average investment, band, percentage), checked top to bottom.
DEFAULT_GRADE_BANDS = (
    (40, Grade.BANDS.high, 100),
    (25, Grade.BANDS.median, 80),
    (0, Grade.BANDS.low, 60),
)


def trimmed_mean(values):
    """
    Average a list of token amounts after dropping the extremes.

    With three or more values exactly one lowest and one highest value are
    dropped, however far from the rest they are. Fewer values are averaged
    as they are.

    Args:
        values (list of int): Token amounts.

    Returns:
        tuple: (average, number of values used). (0.0, 0) for no values.

    Examples:
        >>> trimmed_mean([10, 20, 30])
        (20.0, 1)
        >>> trimmed_mean([10, 20])
        (15.0, 2)

    """
    ordered = sorted(values)
    if len(ordered) >= TRIM_THRESHOLD:
        ordered = ordered[1:-1]
    if not ordered:
        return 0.0, 0
    return sum(ordered) / len(ordered), len(ordered)


def grade_for_average(average):
    """
    Map an average investment to a (band, percentage) pair.

    The thresholds come from the `TYCOON_GRADE_BANDS` setting, a sequence of
    (minimum average, band, percentage) tuples checked in order.
    """
    bands = getattr(settings, "TYCOON_GRADE_BANDS", DEFAULT_GRADE_BANDS)
    for minimum, band, percentage in bands:
        if average >= minimum:
            return band, percentage
    __, band, percentage = bands[-1]
    return band, percentage


def completed_investments_by_team(assignment_id):
    """
    Collect the token amounts each team received in an assignment.

    Only investments whose evaluation assignment is completed count.

    Returns:
        dict: team id -> list of token amounts

    """
    completed = EvaluationAssignment.objects.filter(
        assignment_id=OuterRef("assignment_id"),
        evaluator_id=OuterRef("investor_id"),
        evaluated_team_id=OuterRef("team_id"),
        status=EvaluationAssignment.STATUS.completed,
    )
    rows = (
        Investment.objects.filter(assignment_id=assignment_id)
        .filter(Exists(completed))
        .values_list("team_id", "tokens")
    )
    tokens_by_team = defaultdict(list)
    for team_id, tokens in rows:
        tokens_by_team[team_id].append(tokens)
    return dict(tokens_by_team)
