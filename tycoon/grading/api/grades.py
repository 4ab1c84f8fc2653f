"""Public interface for calculating and reviewing team grades.

A team's grade comes from the tokens its evaluators invested: the trimmed
mean of the investments is mapped to a band ("high", "median" or "low") and
a percentage. Calculated grades are drafts; staff can override them by
hand, which freezes them against recalculation, and publish them.

"""
import logging
import statistics

from django.db import DatabaseError, transaction
from django.utils import timezone

from tycoon.grading.api import interest as interest_api
from tycoon.grading.api.base import completed_investments_by_team, grade_for_average, trimmed_mean
from tycoon.grading.errors import GradingError, GradingInternalError, GradingNotFoundError, GradingRequestError
from tycoon.grading.models import Grade
from tycoon.grading.serializers import GradeSerializer
from tycoon.roster import api as roster_api
from tycoon.roster.models import Assignment, Submission

logger = logging.getLogger("tycoon.grading.api.grades")  # pylint: disable=invalid-name

BULK_ACTIONS = ("publish", "draft", "reset")


def _get_assignment(assignment_id):
    try:
        return Assignment.objects.get(pk=assignment_id)
    except (Assignment.DoesNotExist, ValueError) as ex:
        raise GradingNotFoundError(f"No assignment found with id {assignment_id}") from ex


def calculate_grades(assignment_id):
    """
    Calculate the grade of every team that submitted work for an assignment.

    For each team, the investments of completed evaluations are averaged
    with `trimmed_mean` and mapped to a band with `grade_for_average`. A
    team nobody invested in is graded "incomplete" at 0%.

    Calculation replaces the previous draft rather than adding to it, so it
    can be re-run as evaluations come in. Grades under manual override are
    left untouched. Interest for every investor of the assignment is
    recalculated afterwards.

    Args:
        assignment_id (int): The assignment to grade.

    Returns:
        list of dict: The serialized grade of every submitting team,
            including overridden grades as they stand.

    Raises:
        GradingNotFoundError: The assignment does not exist.
        GradingRequestError: No team has submitted work.
        GradingInternalError: A database error occurred.

    """
    assignment = _get_assignment(assignment_id)
    submissions = list(
        Submission.objects.filter(assignment=assignment, status=Submission.STATUS.submitted)
        .select_related("team")
        .order_by("team_id")
    )
    if not submissions:
        raise GradingRequestError(f"No submissions found for grading assignment {assignment.id}")

    try:
        tokens_by_team = completed_investments_by_team(assignment.id)
        with transaction.atomic():
            grades = [
                _grade_submission(assignment, submission, tokens_by_team.get(submission.team_id, []))
                for submission in submissions
            ]
    except DatabaseError as ex:
        error_message = f"An error occurred while calculating grades for assignment {assignment.id}"
        logger.exception(error_message)
        raise GradingInternalError(error_message) from ex

    interest_api.calculate_interest_for_assignment(assignment.id)

    logger.info("Calculated %d grades for assignment %s", len(grades), assignment.id)
    return GradeSerializer(grades, many=True).data


def _grade_submission(assignment, submission, tokens):
    """
    Create or overwrite the draft grade of one team.

    The existing row is locked so that an override made while we calculate
    is not overwritten.
    """
    grade = (
        Grade.objects.select_for_update()
        .filter(assignment=assignment, team_id=submission.team_id)
        .first()
    )
    if grade is not None and grade.manual_override:
        logger.info("Keeping manually overridden grade %s for team %s", grade.id, submission.team_id)
        return grade

    average, used = trimmed_mean(tokens)
    if used:
        band, percentage = grade_for_average(average)
    else:
        band, percentage = Grade.BANDS.incomplete, 0

    if grade is None:
        grade = Grade(assignment=assignment, team_id=submission.team_id)
    grade.submission = submission
    grade.average_investment = average
    grade.grade = band
    grade.percentage = percentage
    grade.total_investments = used
    grade.status = Grade.STATUS.draft
    grade.published_at = None
    grade.save()
    return grade


def get_grades(assignment_id, status=None):
    """
    Retrieve the grades of an assignment, highest average investment first.

    Keyword Args:
        status (str): Only return grades with this status.

    Raises:
        GradingNotFoundError: The assignment does not exist.
        GradingRequestError: Unknown status.

    """
    assignment = _get_assignment(assignment_id)
    grades = Grade.objects.filter(assignment=assignment).select_related("team")
    if status is not None:
        if status not in Grade.STATUS:
            raise GradingRequestError(f"Unknown grade status '{status}'")
        grades = grades.filter(status=status)
    return GradeSerializer(grades, many=True).data


def get_student_grades(student_id):
    """
    Retrieve the published grades of every team the student belongs to.
    """
    grades = (
        Grade.objects.filter(team__members__student_id=student_id, status=Grade.STATUS.published)
        .select_related("team")
        .order_by("-published_at", "id")
    )
    return GradeSerializer(grades, many=True).data


def override_grade(grade_id, reviewer_id, grade=None, percentage=None, admin_notes=None, status=None,
                   manual_override=None):
    """
    Review a single grade.

    Changing the band or the percentage marks the grade as manually
    overridden; the calculated values are kept in `original_grade` and
    `original_percentage` the first time this happens. Approving or
    publishing records the reviewer.

    Args:
        grade_id (int): The grade to review.
        reviewer_id (str): The staff member making the change.

    Keyword Args:
        grade (str): New band.
        percentage (float): New percentage, 0 to 100.
        admin_notes (str): Notes for other staff.
        status (str): "draft", "approved" or "published".
        manual_override (bool): Freeze or unfreeze the grade explicitly.

    Returns:
        dict: The serialized grade.

    Raises:
        GradingNotFoundError: No grade has this id.
        GradingRequestError: A value is out of range.
        GradingInternalError: The grade could not be saved.

    """
    if grade is not None and grade not in Grade.BANDS:
        raise GradingRequestError(f"Unknown grade '{grade}'")
    if percentage is not None and not 0 <= percentage <= 100:
        raise GradingRequestError("Percentage must be between 0 and 100")
    if status is not None and status not in Grade.STATUS:
        raise GradingRequestError(f"Unknown grade status '{status}'")

    try:
        with transaction.atomic():
            try:
                record = Grade.objects.select_for_update().get(pk=grade_id)
            except (Grade.DoesNotExist, ValueError) as ex:
                raise GradingNotFoundError(f"No grade found with id {grade_id}") from ex

            changes_value = (
                (grade is not None and grade != record.grade)
                or (percentage is not None and percentage != record.percentage)
            )
            if changes_value or manual_override:
                if record.original_grade is None:
                    record.original_grade = record.grade
                    record.original_percentage = record.percentage
                record.manual_override = True
            elif manual_override is False:
                record.manual_override = False

            if grade is not None:
                record.grade = grade
            if percentage is not None:
                record.percentage = percentage
            if admin_notes is not None:
                record.admin_notes = admin_notes
            if status is not None:
                _apply_status(record, status, reviewer_id)
            record.save()
    except DatabaseError as ex:
        error_message = f"An error occurred while updating grade {grade_id}"
        logger.exception(error_message)
        raise GradingInternalError(error_message) from ex

    logger.info("Grade %s reviewed by %s (override=%s, status=%s)",
                record.id, reviewer_id, record.manual_override, record.status)
    return GradeSerializer(record).data


def _apply_status(record, status, reviewer_id):
    now = timezone.now()
    record.status = status
    if status in (Grade.STATUS.approved, Grade.STATUS.published):
        record.reviewed_by = reviewer_id
        record.reviewed_at = now
    if status == Grade.STATUS.published:
        record.published_at = now


def bulk_update_grades(grade_ids, action, reviewer_id):
    """
    Apply a review action to several grades at once.

    Actions:
        publish: publish the grades and record the reviewer.
        draft: move the grades back to draft.
        reset: restore the calculated values of overridden grades, clear
            the override and move them back to draft.

    Returns:
        int: Number of grades updated.

    Raises:
        GradingRequestError: No grade ids, or an unknown action.
        GradingInternalError: The grades could not be saved.

    """
    if not grade_ids:
        raise GradingRequestError("Grade IDs are required")
    if action not in BULK_ACTIONS:
        raise GradingRequestError(f"Invalid action '{action}'")

    try:
        with transaction.atomic():
            # Saved one by one so that each change lands in the grade history.
            grades = list(Grade.objects.select_for_update().filter(pk__in=grade_ids))
            for record in grades:
                if action == "publish":
                    _apply_status(record, Grade.STATUS.published, reviewer_id)
                elif action == "draft":
                    record.status = Grade.STATUS.draft
                else:
                    if record.original_grade is not None:
                        record.grade = record.original_grade
                    if record.original_percentage is not None:
                        record.percentage = record.original_percentage
                    record.original_grade = None
                    record.original_percentage = None
                    record.manual_override = False
                    record.status = Grade.STATUS.draft
                record.save()
    except DatabaseError as ex:
        error_message = f"An error occurred while applying '{action}' to {len(grade_ids)} grades"
        logger.exception(error_message)
        raise GradingInternalError(error_message) from ex

    logger.info("Applied '%s' to %d grades on behalf of %s", action, len(grades), reviewer_id)
    return len(grades)


def get_grade_statistics(assignment_id):
    """
    Summarize the grades of an assignment.

    Returns:
        dict: Team count, number of grades per band, mean and median of the
            average investments and of the percentages, and the total number
            of investments that counted.

    """
    grades = list(Grade.objects.filter(assignment_id=assignment_id))
    stats = {
        "total_teams": len(grades),
        "high_grades": 0,
        "median_grades": 0,
        "low_grades": 0,
        "incomplete_grades": 0,
        "average_investment": 0,
        "median_investment": 0,
        "average_percentage": 0,
        "median_percentage": 0,
        "total_investments": 0,
    }
    if not grades:
        return stats

    for grade in grades:
        stats[f"{grade.grade}_grades"] += 1
    investments = [grade.average_investment for grade in grades]
    percentages = [grade.percentage for grade in grades]
    stats.update({
        "average_investment": statistics.mean(investments),
        "median_investment": statistics.median(investments),
        "average_percentage": statistics.mean(percentages),
        "median_percentage": statistics.median(percentages),
        "total_investments": sum(grade.total_investments for grade in grades),
    })
    return stats


def complete_expired_assignments(now=None):
    """
    Grade every assignment whose evaluation phase is past its due date, then close it.

    Assignments without submitted work are closed but not graded. An
    assignment whose grading fails is logged and left open, so that the next
    sweep picks it up again; the other assignments are still completed.

    Returns:
        list of dict: For each closed assignment, its "id", "title",
            "evaluation_due_date" and the number of grades calculated.

    """
    now = now or timezone.now()
    completed = []
    for assignment in roster_api.get_expired_evaluations(now=now):
        try:
            graded = len(calculate_grades(assignment["id"]))
        except GradingRequestError:
            logger.warning("Assignment %s closed without submissions to grade", assignment["id"])
            graded = 0
        except GradingError:
            logger.exception("Grading failed for assignment %s; its evaluation stays open", assignment["id"])
            continue
        roster_api.close_expired_evaluations(now=now, assignment_ids=[assignment["id"]])
        completed.append({
            "id": assignment["id"],
            "title": assignment["title"],
            "evaluation_due_date": assignment["evaluation_due_date"],
            "grades_calculated": graded,
        })
    return completed
