"""Public interface for investing tokens in peer teams.

Investing in a team is how a student completes the evaluation of that team.
Each student may put 0 to 50 tokens into any team they were assigned, once
per team, and at most 100 tokens across an assignment.

"""
import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from tycoon.evaluation.errors import InvestmentInternalError, InvestmentRequestError, InvestmentWorkflowError
from tycoon.evaluation.models import EvaluationAssignment, Investment
from tycoon.evaluation.serializers import InvestmentSerializer
from tycoon.roster.models import Assignment

logger = logging.getLogger("tycoon.evaluation.api.investment")  # pylint: disable=invalid-name


def _token_limits():
    """Return (max tokens per team, token budget per assignment)."""
    return (
        getattr(settings, "TYCOON_MAX_TOKENS_PER_TEAM", Investment.MAX_TOKENS_PER_TEAM),
        getattr(settings, "TYCOON_TOKEN_BUDGET", Investment.TOKEN_BUDGET),
    )


def invest(assignment_id, investor_id, team_id, tokens):
    """
    Invest tokens in a team and complete its evaluation.

    Args:
        assignment_id (int): The assignment under evaluation.
        investor_id (str): The investing student.
        team_id (int): The team being invested in.
        tokens (int): Number of tokens, 0 to 50.

    Returns:
        dict: The serialized investment.

    Raises:
        InvestmentRequestError: The token amount is invalid.
        InvestmentWorkflowError: The assignment is not open for evaluation,
            the student was not assigned this team, already invested in it,
            or would exceed their budget.
        InvestmentInternalError: A database error occurred.

    """
    max_per_team, budget = _token_limits()
    if isinstance(tokens, bool) or not isinstance(tokens, int):
        raise InvestmentRequestError("Investment amount must be a whole number of tokens.")
    if not 0 <= tokens <= max_per_team:
        raise InvestmentRequestError(f"Investment amount must be between 0 and {max_per_team} tokens")

    try:
        with transaction.atomic():
            assignment = Assignment.objects.filter(pk=assignment_id).first()
            if assignment is None or not assignment.is_evaluation_active:
                raise InvestmentWorkflowError(f"Assignment {assignment_id} is not open for evaluation.")

            # The budget spans every team, so lock all of the investor's evaluations.
            locked = EvaluationAssignment.objects.select_for_update().filter(
                assignment=assignment, evaluator_id=investor_id
            )
            evaluation = next(
                (candidate for candidate in locked if candidate.evaluated_team_id == team_id), None
            )
            if evaluation is None:
                raise InvestmentWorkflowError("You are not assigned to evaluate this team.")

            existing = Investment.objects.filter(assignment=assignment, investor_id=investor_id)
            if existing.filter(team_id=team_id).exists():
                raise InvestmentWorkflowError("You have already invested in this team.")

            used = existing.aggregate(used=Sum("tokens"))["used"] or 0
            if used + tokens > budget:
                raise InvestmentWorkflowError(
                    f"Investment would exceed the {budget} token limit; {budget - used} tokens remaining."
                )

            investment = Investment.objects.create(
                assignment=assignment,
                investor_id=investor_id,
                team_id=team_id,
                tokens=tokens,
                rank=existing.count() + 1,
            )
            evaluation.mark_completed(timezone.now())
    except IntegrityError as ex:
        logger.warning("Duplicate investment by %s in team %s", investor_id, team_id)
        raise InvestmentWorkflowError("You have already invested in this team.") from ex
    except DatabaseError as ex:
        error_message = (
            "An error occurred while {} invested {} tokens in team {}"
        ).format(investor_id, tokens, team_id)
        logger.exception(error_message)
        raise InvestmentInternalError(error_message) from ex

    logger.info(
        "Student %s invested %d tokens in team %s for assignment %s",
        investor_id, tokens, team_id, assignment_id
    )
    return InvestmentSerializer(investment).data


def get_student_investments(investor_id, assignment_id):
    """
    Retrieve a student's investments in an assignment, in the order made.
    """
    investments = Investment.objects.filter(assignment_id=assignment_id, investor_id=investor_id)
    return InvestmentSerializer(investments.order_by("rank"), many=True).data


def get_remaining_tokens(investor_id, assignment_id):
    """
    Number of tokens the student can still invest in the assignment.
    """
    __, budget = _token_limits()
    used = Investment.objects.filter(
        assignment_id=assignment_id, investor_id=investor_id
    ).aggregate(used=Sum("tokens"))["used"] or 0
    return max(budget - used, 0)
