"""
Public interface for the roster app.

The roster holds the assignments of a course, the teams that work on them
and the work those teams submit. The evaluation and grading apps read
teams and submissions through this module.

"""
import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from tycoon.roster.errors import RosterInternalError, RosterNotFoundError, RosterRequestError
from tycoon.roster.models import Assignment, Submission, Team, TeamMember
from tycoon.roster.serializers import AssignmentSerializer, SubmissionSerializer, TeamSerializer

logger = logging.getLogger("tycoon.roster.api")  # pylint: disable=invalid-name


def create_assignment(course_id, title, due_date, **assignment_data):
    """
    Create an assignment in a course.

    Args:
        course_id (str): The course the assignment belongs to.
        title (str): Display title.
        due_date (datetime): When team submissions are due.

    Keyword Args:
        Any other writable `Assignment` field, for example
        `evaluation_due_date` or `evaluations_per_student`.

    Returns:
        dict: The serialized assignment.

    Raises:
        RosterRequestError: The assignment data is invalid.
        RosterInternalError: The assignment could not be saved.

    """
    data = dict(assignment_data, course_id=course_id, title=title, due_date=due_date)
    serializer = AssignmentSerializer(data=data)
    if not serializer.is_valid():
        raise RosterRequestError(serializer.errors)

    try:
        assignment = serializer.save()
    except DatabaseError as ex:
        error_message = "An error occurred while creating assignment '{}' in course {}".format(title, course_id)
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex

    logger.info("Created assignment %s in course %s", assignment.id, course_id)
    return AssignmentSerializer(assignment).data


def get_assignment(assignment_id):
    """
    Retrieve a single assignment.

    Raises:
        RosterNotFoundError: No assignment has this id.
        RosterInternalError: The assignment could not be read.

    """
    return AssignmentSerializer(_get_assignment_model(assignment_id)).data


def _get_assignment_model(assignment_id):
    try:
        return Assignment.objects.get(pk=assignment_id)
    except (Assignment.DoesNotExist, ValueError) as ex:
        raise RosterNotFoundError(f"No assignment found with id {assignment_id}") from ex
    except DatabaseError as ex:
        error_message = f"An error occurred while retrieving assignment {assignment_id}"
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex


def create_team(course_id, name, members, assignment_id=None, description=""):
    """
    Create a team and its memberships.

    A student may belong to only one team per assignment. Teams created
    without an assignment are course-wide.

    Args:
        course_id (str): The course the team belongs to.
        name (str): Display name.
        members (list of str): Student ids of the members.

    Keyword Args:
        assignment_id (int): Scope the team to a single assignment.
        description (str): Optional free text.

    Returns:
        dict: The serialized team, including the sorted member ids.

    Raises:
        RosterRequestError: Missing members, or a student is already on
            another team in the same scope.
        RosterNotFoundError: The assignment does not exist.
        RosterInternalError: The team could not be saved.

    """
    members = [str(member) for member in members or []]
    if not members:
        raise RosterRequestError({"members": ["A team needs at least one member."]})
    if len(set(members)) != len(members):
        raise RosterRequestError({"members": ["A student can only be listed once."]})

    assignment = _get_assignment_model(assignment_id) if assignment_id is not None else None

    taken = TeamMember.objects.filter(student_id__in=members, team__course_id=course_id)
    if assignment is not None:
        taken = taken.filter(Q(team__assignment=assignment) | Q(team__assignment__isnull=True))
    else:
        taken = taken.filter(team__assignment__isnull=True)
    taken_ids = sorted(set(taken.values_list("student_id", flat=True)))
    if taken_ids:
        raise RosterRequestError(
            {"members": ["Already on another team: {}".format(", ".join(taken_ids))]}
        )

    try:
        with transaction.atomic():
            team = Team.objects.create(
                course_id=course_id,
                assignment=assignment,
                name=name,
                description=description,
            )
            TeamMember.objects.bulk_create(
                [TeamMember(team=team, student_id=student_id) for student_id in members]
            )
    except DatabaseError as ex:
        error_message = f"An error occurred while creating team '{name}' in course {course_id}"
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex

    logger.info("Created team %s with %d members in course %s", team.id, len(members), course_id)
    return TeamSerializer(team).data


def get_team(team_id):
    """
    Retrieve a single team.

    Raises:
        RosterNotFoundError: No team has this id.

    """
    try:
        team = Team.objects.prefetch_related("members").get(pk=team_id)
    except (Team.DoesNotExist, ValueError) as ex:
        raise RosterNotFoundError(f"No team found with id {team_id}") from ex
    return TeamSerializer(team).data


def get_teams(assignment_id=None, course_id=None):
    """
    List teams, optionally limited to an assignment or a course.

    Teams for an assignment include the course-wide teams of its course.
    """
    teams = Team.objects.prefetch_related("members")
    if assignment_id is not None:
        assignment = _get_assignment_model(assignment_id)
        teams = teams.filter(
            Q(assignment=assignment) | Q(assignment__isnull=True, course_id=assignment.course_id)
        )
    if course_id is not None:
        teams = teams.filter(course_id=course_id)
    return TeamSerializer(teams, many=True).data


def get_team_for_student(assignment_id, student_id):
    """
    Find the team a student works in for an assignment.

    An assignment-scoped team takes precedence over a course-wide one.

    Returns:
        dict or None: The serialized team, or None if the student has none.

    """
    assignment = _get_assignment_model(assignment_id)
    memberships = TeamMember.objects.select_related("team").filter(
        student_id=student_id, team__course_id=assignment.course_id
    )
    scoped = memberships.filter(team__assignment=assignment).first()
    membership = scoped or memberships.filter(team__assignment__isnull=True).first()
    if membership is None:
        return None
    return TeamSerializer(membership.team).data


def submit(assignment_id, team_id, primary_link, backup_link="", status=Submission.STATUS.submitted):
    """
    Create or update the submission of a team for an assignment.

    Args:
        assignment_id (int): The assignment being worked on.
        team_id (int): The submitting team.
        primary_link (str): Where the work can be found.

    Keyword Args:
        backup_link (str): A fallback location.
        status (str): "submitted" (the default) or "draft".

    Returns:
        dict: The serialized submission.

    Raises:
        RosterRequestError: Unknown status, or the team does not work on
            this assignment.
        RosterNotFoundError: The assignment or team does not exist.
        RosterInternalError: The submission could not be saved.

    """
    if status not in Submission.STATUS:
        raise RosterRequestError({"status": [f"Unknown submission status '{status}'."]})
    if status == Submission.STATUS.submitted and not primary_link:
        raise RosterRequestError({"primary_link": ["A link to the work is required."]})

    assignment = _get_assignment_model(assignment_id)
    try:
        team = Team.objects.get(pk=team_id)
    except (Team.DoesNotExist, ValueError) as ex:
        raise RosterNotFoundError(f"No team found with id {team_id}") from ex

    if team.course_id != assignment.course_id or team.assignment_id not in (None, assignment.id):
        raise RosterRequestError({"team": [f"Team {team_id} does not work on assignment {assignment_id}."]})

    defaults = {
        "status": status,
        "primary_link": primary_link,
        "backup_link": backup_link,
        "submitted_at": timezone.now() if status == Submission.STATUS.submitted else None,
    }
    try:
        with transaction.atomic():
            submission, created = Submission.objects.update_or_create(
                assignment=assignment, team=team, defaults=defaults
            )
    except IntegrityError:
        # A concurrent request created the row first; retry as an update.
        logger.warning("Submission for team %s raced on assignment %s", team_id, assignment_id)
        submission = Submission.objects.get(assignment=assignment, team=team)
        for field, value in defaults.items():
            setattr(submission, field, value)
        submission.save()
        created = False
    except DatabaseError as ex:
        error_message = f"An error occurred while saving the submission of team {team_id}"
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex

    logger.info(
        "%s %s submission %s for team %s on assignment %s",
        "Created" if created else "Updated", status, submission.id, team_id, assignment_id
    )
    return SubmissionSerializer(submission).data


def get_submitted_teams(assignment_id):
    """
    Retrieve every team with submitted work for an assignment.

    Args:
        assignment_id (int): The assignment.

    Returns:
        list of dict: One entry per submitted submission, each with
            "submission_id", "team_id" and "members" (a set of student ids),
            ordered by team id.

    Raises:
        RosterNotFoundError: The assignment does not exist.
        RosterInternalError: The submissions could not be read.

    """
    assignment = _get_assignment_model(assignment_id)
    try:
        submissions = list(
            Submission.objects.filter(assignment=assignment, status=Submission.STATUS.submitted)
            .select_related("team")
            .prefetch_related("team__members")
            .order_by("team_id")
        )
    except DatabaseError as ex:
        error_message = f"An error occurred while retrieving submissions for assignment {assignment_id}"
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex

    return [
        {
            "submission_id": submission.id,
            "team_id": submission.team_id,
            "members": submission.team.member_ids,
        }
        for submission in submissions
    ]


def update_assignment_status(now=None):
    """
    Open assignments whose start date has passed and close the ones past due.

    Returns:
        tuple: (number activated, number deactivated)

    """
    now = now or timezone.now()
    activated = Assignment.objects.filter(
        is_active=False, start_date__lte=now, due_date__gte=now
    ).update(is_active=True)
    deactivated = Assignment.objects.filter(is_active=True, due_date__lt=now).update(is_active=False)
    if activated or deactivated:
        logger.info("Activated %d and deactivated %d assignments", activated, deactivated)
    return activated, deactivated


def _expired_evaluations(now):
    return Assignment.objects.filter(
        is_evaluation_active=True,
        evaluation_due_date__isnull=False,
        evaluation_due_date__lt=now,
    ).order_by("evaluation_due_date", "id")


def get_expired_evaluations(now=None):
    """
    Retrieve the assignments still open for evaluation past their evaluation due date.
    """
    return AssignmentSerializer(_expired_evaluations(now or timezone.now()), many=True).data


def close_expired_evaluations(now=None, assignment_ids=None):
    """
    End the evaluation phase of every assignment whose evaluation due date has passed.

    Keyword Args:
        assignment_ids (list): Only close these assignments.

    Returns:
        list of dict: The serialized assignments that were closed.

    Raises:
        RosterInternalError: The assignments could not be updated.

    """
    now = now or timezone.now()
    try:
        with transaction.atomic():
            expired = _expired_evaluations(now).select_for_update()
            if assignment_ids is not None:
                expired = expired.filter(pk__in=assignment_ids)
            expired = list(expired)
            for assignment in expired:
                assignment.is_evaluation_active = False
                assignment.save(update_fields=["is_evaluation_active", "modified"])
    except DatabaseError as ex:
        error_message = "An error occurred while closing expired evaluations"
        logger.exception(error_message)
        raise RosterInternalError(error_message) from ex

    if expired:
        logger.info(
            "Closed evaluation for assignments: %s", ", ".join(str(assignment.id) for assignment in expired)
        )
    return AssignmentSerializer(expired, many=True).data
