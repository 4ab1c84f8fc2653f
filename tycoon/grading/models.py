"""
Django models for team grades and the interest investors earn on them.

NOTE: We've switched to migrations, so if you make any edits to this file, you
need to then generate a matching migration for it using:

    ./manage.py makemigrations grading

"""
from django.db import models

from model_utils import Choices
from model_utils.models import StatusModel, TimeStampedModel
from simple_history.models import HistoricalRecords

from tycoon.roster.models import Assignment, Submission, Team

GRADE_STATUS = Choices("draft", "approved", "published")


class GradeHistoryStatus(models.Model):
    """
    Base of the historical grade model.

    The history table copies the grade's status field, which needs a STATUS
    attribute on whatever model it is attached to.
    """
    STATUS = GRADE_STATUS

    class Meta:
        abstract = True


class Grade(TimeStampedModel, StatusModel):
    """
    The grade a team earned for an assignment.

    Grades are calculated as drafts from the tokens peers invested in the
    team. Staff then review them: a grade can be overridden by hand, which
    freezes it against recalculation, and is eventually published to the
    students.
    """
    STATUS = GRADE_STATUS  # implicit "status" field
    BANDS = Choices("high", "median", "low", "incomplete")

    assignment = models.ForeignKey(Assignment, related_name="grades", on_delete=models.CASCADE)
    team = models.ForeignKey(Team, related_name="grades", on_delete=models.CASCADE)
    submission = models.ForeignKey(Submission, related_name="grades", on_delete=models.CASCADE)

    average_investment = models.FloatField(default=0)
    grade = models.CharField(max_length=20, choices=BANDS, default=BANDS.incomplete)
    percentage = models.FloatField(default=0)
    total_investments = models.PositiveIntegerField(default=0)

    admin_notes = models.TextField(blank=True, default="")
    manual_override = models.BooleanField(default=False)
    original_grade = models.CharField(max_length=20, choices=BANDS, null=True, blank=True)
    original_percentage = models.FloatField(null=True, blank=True)
    reviewed_by = models.CharField(max_length=255, null=True, blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)

    history = HistoricalRecords(bases=[GradeHistoryStatus])

    class Meta:
        app_label = "grading"
        ordering = ["-average_investment", "id"]
        unique_together = ("assignment", "team")

    def __str__(self):
        return f"Grade {self.grade} ({self.percentage}%) for team {self.team_id}"


class InterestRecord(TimeStampedModel):
    """
    Interest a student earned on the tokens invested in one team.
    """
    student_id = models.CharField(max_length=255, db_index=True)
    assignment = models.ForeignKey(Assignment, related_name="interest_records", on_delete=models.CASCADE)
    team = models.ForeignKey(Team, related_name="interest_records", on_delete=models.CASCADE)
    tokens_invested = models.PositiveSmallIntegerField(default=0)
    performance_tier = models.CharField(max_length=20, choices=Grade.BANDS)
    interest_earned = models.FloatField(default=0)

    class Meta:
        app_label = "grading"
        unique_together = ("student_id", "assignment", "team")

    def __str__(self):
        return f"{self.student_id} earned {self.interest_earned} on team {self.team_id}"
