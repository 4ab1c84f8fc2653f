"""Public interface for distributing peer evaluations.

Once teams have submitted their work, an administrator distributes the
assignment: every student on a submitting team is given a fixed number of
other teams to evaluate. Evaluation then proceeds through the investment API.

"""
from collections import defaultdict
from datetime import timedelta
import logging
import random

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from tycoon.evaluation.errors import (AlreadyDistributedError, EvaluationInternalError, EvaluationNotFoundError,
                                      EvaluationRequestError, EvaluationWorkflowError, InsufficientTeamsError)
from tycoon.evaluation.models import EvaluationAssignment, EvaluationDistribution
from tycoon.evaluation.serializers import EvaluationAssignmentSerializer
from tycoon.roster import api as roster_api
from tycoon.roster.errors import RosterError, RosterNotFoundError
from tycoon.roster.models import Assignment

logger = logging.getLogger("tycoon.evaluation.api.distribution")  # pylint: disable=invalid-name

# Evaluation is due this long after submissions when no date was configured.
DEFAULT_EVALUATION_PERIOD = timedelta(days=3)


def is_distributed(assignment_id):
    """
    Check whether evaluations have been distributed for an assignment.

    Args:
        assignment_id (int): The assignment.

    Returns:
        bool

    """
    try:
        return (
            EvaluationDistribution.objects.filter(assignment_id=assignment_id).exists()
            or EvaluationAssignment.objects.filter(assignment_id=assignment_id).exists()
        )
    except DatabaseError as ex:
        error_message = f"An error occurred while checking distribution of assignment {assignment_id}"
        logger.exception(error_message)
        raise EvaluationInternalError(error_message) from ex


def distribute(assignment_id, evaluations_per_student=None, requested_by=None, rng=None):
    """
    Assign every student of a submitting team peer teams to evaluate.

    Each student receives exactly `evaluations_per_student` distinct teams,
    never their own. Teams are handed out least-evaluated first with ties
    broken at random, which keeps the number of evaluators per team within
    one of the average whenever the rosters allow it.

    Distribution is all or nothing: the distribution marker, every
    evaluation assignment and the assignment's evaluation flag are written
    in a single transaction. A failed distribution leaves no rows behind and
    can be re-triggered.

    Args:
        assignment_id (int): The assignment to distribute.

    Keyword Args:
        evaluations_per_student (int): Teams per student, 1 to 10. Defaults
            to the assignment's configured count.
        requested_by (str): Who triggered the distribution, for the record.
        rng (random.Random): Source of randomness for tie breaking.

    Returns:
        list of dict: The serialized evaluation assignments that were created.

    Raises:
        EvaluationRequestError: The evaluation count is out of range.
        EvaluationNotFoundError: The assignment does not exist.
        AlreadyDistributedError: The assignment was distributed before.
        InsufficientTeamsError: Too few teams submitted work.
        EvaluationInternalError: A database error occurred.

    Examples:
        >>> distribute(12, evaluations_per_student=2)
        [
            {
                'id': 1,
                'assignment': 12,
                'evaluator_id': u'alice',
                'evaluated_team': 3,
                'team_name': u'Rocket Lettuce',
                'submission': 7,
                'status': u'assigned',
                ...
            },
            ...
        ]

    """
    try:
        assignment = Assignment.objects.get(pk=assignment_id)
    except (Assignment.DoesNotExist, ValueError) as ex:
        raise EvaluationNotFoundError(f"No assignment found with id {assignment_id}") from ex

    if evaluations_per_student is None:
        evaluations_per_student = assignment.evaluations_per_student
    _validate_evaluation_count(evaluations_per_student)

    if is_distributed(assignment.id):
        raise AlreadyDistributedError(
            f"Assignment {assignment.id} has already been distributed to students for evaluation."
        )

    try:
        submitted = roster_api.get_submitted_teams(assignment.id)
    except RosterNotFoundError as ex:
        raise EvaluationNotFoundError(str(ex)) from ex
    except RosterError as ex:
        raise EvaluationInternalError(str(ex)) from ex

    pairs = plan_distribution(submitted, evaluations_per_student, rng=rng)
    submission_for_team = {entry["team_id"]: entry["submission_id"] for entry in submitted}
    due_at = assignment.evaluation_due_date or assignment.due_date + DEFAULT_EVALUATION_PERIOD

    try:
        with transaction.atomic():
            EvaluationDistribution.objects.create(
                assignment=assignment,
                evaluations_per_student=evaluations_per_student,
                distributed_by=requested_by,
            )
            EvaluationAssignment.objects.bulk_create([
                EvaluationAssignment(
                    assignment=assignment,
                    evaluator_id=student_id,
                    evaluated_team_id=team_id,
                    submission_id=submission_for_team[team_id],
                    due_at=due_at,
                )
                for student_id, team_id in pairs
            ])
            assignment.is_evaluation_active = True
            assignment.evaluations_per_student = evaluations_per_student
            if assignment.evaluation_start_date is None:
                assignment.evaluation_start_date = timezone.now()
            assignment.save()
    except IntegrityError as ex:
        # Someone else inserted the distribution marker first.
        logger.warning("Concurrent distribution of assignment %s was rejected", assignment.id)
        raise AlreadyDistributedError(
            f"Assignment {assignment.id} has already been distributed to students for evaluation."
        ) from ex
    except DatabaseError as ex:
        error_message = f"An error occurred while distributing evaluations for assignment {assignment.id}"
        logger.exception(error_message)
        raise EvaluationInternalError(error_message) from ex

    created = EvaluationAssignment.objects.filter(assignment=assignment).select_related("evaluated_team")
    logger.info(
        "Distributed %d evaluations over %d teams for assignment %s (%d per student)",
        len(pairs), len(submitted), assignment.id, evaluations_per_student
    )
    return EvaluationAssignmentSerializer(created, many=True).data


def _validate_evaluation_count(evaluations_per_student):
    if isinstance(evaluations_per_student, bool) or not isinstance(evaluations_per_student, int):
        raise EvaluationRequestError("Evaluations per student must be a whole number.")
    if not (Assignment.MIN_EVALUATIONS_PER_STUDENT
            <= evaluations_per_student
            <= Assignment.MAX_EVALUATIONS_PER_STUDENT):
        raise EvaluationRequestError(
            "Evaluations per student must be between {} and {}".format(
                Assignment.MIN_EVALUATIONS_PER_STUDENT, Assignment.MAX_EVALUATIONS_PER_STUDENT
            )
        )


def plan_distribution(submitted_teams, evaluations_per_student, rng=None):
    """
    Decide which student evaluates which team, without touching the database.

    Args:
        submitted_teams (list of dict): Entries with "team_id" and "members",
            as returned by `roster.api.get_submitted_teams`.
        evaluations_per_student (int): Teams each student must evaluate.

    Keyword Args:
        rng (random.Random): Source of randomness.

    Returns:
        list of (str, int): (student id, team id) pairs, no student paired
            with their own team and no pair repeated.

    Raises:
        InsufficientTeamsError: Some student has fewer than
            `evaluations_per_student` teams to choose from.
        EvaluationWorkflowError: No student belongs to a submitting team.

    """
    rng = rng or random.Random()

    if not submitted_teams:
        raise InsufficientTeamsError("No team has submitted work for this assignment.")

    team_ids = [entry["team_id"] for entry in submitted_teams]
    own_teams = defaultdict(set)
    for entry in submitted_teams:
        for student_id in entry["members"]:
            own_teams[student_id].add(entry["team_id"])

    if not own_teams:
        raise EvaluationWorkflowError("No students belong to a team that submitted work.")

    # Checked up front so that nothing is planned when any student falls short.
    smallest_pool = len(team_ids) - max(len(teams) for teams in own_teams.values())
    if smallest_pool < evaluations_per_student:
        raise InsufficientTeamsError(
            "Need {} teams other than a student's own to give {} evaluations per student, "
            "but only {} are available.".format(evaluations_per_student, evaluations_per_student, smallest_pool)
        )

    students = sorted(own_teams)
    rng.shuffle(students)

    load = dict.fromkeys(team_ids, 0)
    pairs = []
    for student_id in students:
        pool = [team_id for team_id in team_ids if team_id not in own_teams[student_id]]
        rng.shuffle(pool)
        # Stable sort: equally loaded teams keep their shuffled order.
        pool.sort(key=load.__getitem__)
        for team_id in pool[:evaluations_per_student]:
            load[team_id] += 1
            pairs.append((student_id, team_id))

    return pairs


def get_student_evaluations(student_id, assignment_id=None):
    """
    Retrieve the evaluations a student has been assigned.

    Args:
        student_id (str): The evaluating student.

    Keyword Args:
        assignment_id (int): Limit the result to one assignment.

    Returns:
        list of dict: Serialized evaluation assignments, most recent first.

    """
    evaluations = EvaluationAssignment.objects.filter(evaluator_id=student_id).select_related("evaluated_team")
    if assignment_id is not None:
        evaluations = evaluations.filter(assignment_id=assignment_id)
    return EvaluationAssignmentSerializer(evaluations.order_by("-created", "-id"), many=True).data


def get_evaluation_status(assignment_id):
    """
    Summarize evaluation progress of every evaluator in an assignment.

    Returns:
        dict: "evaluators" (a list with "evaluator_id", "assigned",
            "completed" and "is_complete" per student), plus totals.

    Raises:
        EvaluationNotFoundError: The assignment does not exist.

    """
    if not Assignment.objects.filter(pk=assignment_id).exists():
        raise EvaluationNotFoundError(f"No assignment found with id {assignment_id}")

    rows = (
        EvaluationAssignment.objects.filter(assignment_id=assignment_id)
        .values("evaluator_id")
        .annotate(
            assigned=Count("id"),
            completed=Count("id", filter=Q(status=EvaluationAssignment.STATUS.completed)),
        )
        .order_by("evaluator_id")
    )
    evaluators = [
        {
            "evaluator_id": row["evaluator_id"],
            "assigned": row["assigned"],
            "completed": row["completed"],
            "is_complete": row["completed"] == row["assigned"],
        }
        for row in rows
    ]
    return {
        "assignment_id": int(assignment_id),
        "evaluators": evaluators,
        "total_assigned": sum(row["assigned"] for row in evaluators),
        "total_completed": sum(row["completed"] for row in evaluators),
        "students_complete": sum(1 for row in evaluators if row["is_complete"]),
    }
