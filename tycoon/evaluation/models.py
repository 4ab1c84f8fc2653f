"""
Django models for peer evaluation: who evaluates which team, and the
tokens they invest.

NOTE: We've switched to migrations, so if you make any edits to this file, you
need to then generate a matching migration for it using:

    ./manage.py makemigrations evaluation

"""
from django.db import models
from django.utils.timezone import now

from model_utils import Choices
from model_utils.models import StatusModel, TimeStampedModel

from tycoon.roster.models import Assignment, Submission, Team


class EvaluationDistribution(models.Model):
    """
    Marks an assignment as distributed.

    The one-to-one relation to the assignment is what guarantees that
    distribution happens at most once: a second insert fails with an
    IntegrityError even when two requests race past the application check.
    """
    assignment = models.OneToOneField(Assignment, related_name="distribution", on_delete=models.CASCADE)
    evaluations_per_student = models.PositiveSmallIntegerField()
    distributed_by = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(default=now, db_index=True)

    class Meta:
        app_label = "evaluation"

    def __str__(self):
        return f"Distribution of assignment {self.assignment_id}"


class EvaluationAssignment(TimeStampedModel, StatusModel):
    """
    A single student's task to evaluate a single peer team.

    The student completes it by investing tokens in the team.
    """
    STATUS = Choices("assigned", "completed")  # implicit "status" field

    assignment = models.ForeignKey(Assignment, related_name="evaluations", on_delete=models.CASCADE)
    evaluator_id = models.CharField(max_length=255, db_index=True)
    evaluated_team = models.ForeignKey(Team, related_name="evaluations_received", on_delete=models.CASCADE)
    submission = models.ForeignKey(Submission, related_name="evaluations", on_delete=models.CASCADE)
    due_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "evaluation"
        ordering = ["assignment", "evaluator_id", "id"]
        unique_together = ("assignment", "evaluator_id", "evaluated_team")

    def __str__(self):
        return f"{self.evaluator_id} evaluates team {self.evaluated_team_id} ({self.status})"

    @property
    def is_complete(self):
        return self.status == self.STATUS.completed

    def mark_completed(self, completed_at=None):
        self.status = self.STATUS.completed
        self.completed_at = completed_at or now()
        self.save()


class Investment(TimeStampedModel):
    """
    Tokens a student invested in a team they evaluated.
    """
    MAX_TOKENS_PER_TEAM = 50
    TOKEN_BUDGET = 100

    assignment = models.ForeignKey(Assignment, related_name="investments", on_delete=models.CASCADE)
    investor_id = models.CharField(max_length=255, db_index=True)
    team = models.ForeignKey(Team, related_name="investments_received", on_delete=models.CASCADE)
    tokens = models.PositiveSmallIntegerField()
    rank = models.PositiveSmallIntegerField(default=1)

    class Meta:
        app_label = "evaluation"
        ordering = ["assignment", "investor_id", "rank"]
        unique_together = ("assignment", "investor_id", "team")

    def __str__(self):
        return f"{self.investor_id} invested {self.tokens} in team {self.team_id}"
