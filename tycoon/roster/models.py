"""
Django models for the course roster: assignments, the teams that work on
them and the work those teams submit.

NOTE: We've switched to migrations, so if you make any edits to this file, you
need to then generate a matching migration for it using:

    ./manage.py makemigrations roster

"""
import logging

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.timezone import now

from model_utils import Choices
from model_utils.models import StatusModel, TimeStampedModel

logger = logging.getLogger("tycoon.roster.models")  # pylint: disable=invalid-name


class Assignment(TimeStampedModel):
    """
    A piece of team work in a course.

    An assignment moves through two phases: teams submit work until
    `due_date`, then, once evaluations have been distributed, students
    evaluate and invest in peer teams until `evaluation_due_date`.
    """
    MIN_EVALUATIONS_PER_STUDENT = 1
    MAX_EVALUATIONS_PER_STUDENT = 10
    DEFAULT_EVALUATIONS_PER_STUDENT = 5

    course_id = models.CharField(max_length=255, db_index=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    document_url = models.CharField(max_length=1024, blank=True, default="")

    start_date = models.DateTimeField(default=now)
    due_date = models.DateTimeField()
    evaluation_start_date = models.DateTimeField(null=True, blank=True)
    evaluation_due_date = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=False)
    is_evaluation_active = models.BooleanField(default=False, db_index=True)

    evaluations_per_student = models.PositiveSmallIntegerField(
        default=DEFAULT_EVALUATIONS_PER_STUDENT,
        validators=[
            MinValueValidator(MIN_EVALUATIONS_PER_STUDENT),
            MaxValueValidator(MAX_EVALUATIONS_PER_STUDENT),
        ]
    )

    class Meta:
        app_label = "roster"
        ordering = ["-created", "id"]

    def __str__(self):
        return f"Assignment {self.id}: {self.title}"


class Team(TimeStampedModel):
    """
    A group of students.

    Teams belong to a course and may be scoped to a single assignment; a
    team without an assignment is reused across the course.
    """
    course_id = models.CharField(max_length=255, db_index=True)
    assignment = models.ForeignKey(
        Assignment, related_name="teams", null=True, blank=True, on_delete=models.CASCADE
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    class Meta:
        app_label = "roster"
        ordering = ["name", "id"]

    def __str__(self):
        return f"Team {self.id}: {self.name}"

    @property
    def member_ids(self):
        """The student ids of everyone on the team."""
        return {member.student_id for member in self.members.all()}


class TeamMember(models.Model):
    """
    Membership of a single student in a team.
    """
    team = models.ForeignKey(Team, related_name="members", on_delete=models.CASCADE)
    student_id = models.CharField(max_length=255, db_index=True)
    joined_at = models.DateTimeField(default=now)

    class Meta:
        app_label = "roster"
        unique_together = ("team", "student_id")

    def __str__(self):
        return f"{self.student_id} in team {self.team_id}"


class Submission(TimeStampedModel, StatusModel):
    """
    The work a team handed in for an assignment.

    A team has at most one submission per assignment; resubmitting updates
    the existing row.
    """
    STATUS = Choices("draft", "submitted")  # implicit "status" field

    assignment = models.ForeignKey(Assignment, related_name="submissions", on_delete=models.CASCADE)
    team = models.ForeignKey(Team, related_name="submissions", on_delete=models.CASCADE)
    submitted_at = models.DateTimeField(null=True, blank=True, db_index=True)
    primary_link = models.CharField(max_length=1024, blank=True, default="")
    backup_link = models.CharField(max_length=1024, blank=True, default="")

    class Meta:
        app_label = "roster"
        ordering = ["submitted_at", "id"]
        unique_together = ("assignment", "team")

    def __str__(self):
        return f"Submission {self.id} ({self.status}) by team {self.team_id}"

    @property
    def is_submitted(self):
        return self.status == self.STATUS.submitted
