"""
Request body validation for the tycoon API.
"""
from rest_framework import serializers

from tycoon.grading.api.grades import BULK_ACTIONS
from tycoon.grading.models import Grade
from tycoon.roster.models import Assignment


class DistributeRequestSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    evaluations_per_student = serializers.IntegerField(
        required=False,
        min_value=Assignment.MIN_EVALUATIONS_PER_STUDENT,
        max_value=Assignment.MAX_EVALUATIONS_PER_STUDENT,
    )


class InvestmentRequestSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    assignment_id = serializers.IntegerField()
    team_id = serializers.IntegerField()
    tokens = serializers.IntegerField()


class GradeUpdateSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Fields a reviewer may change on a grade. All are optional.
    """
    grade = serializers.ChoiceField(choices=Grade.BANDS, required=False)
    percentage = serializers.FloatField(required=False, min_value=0, max_value=100)
    admin_notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Grade.STATUS, required=False)
    manual_override = serializers.BooleanField(required=False)


class BulkGradeSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    grade_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    action = serializers.ChoiceField(choices=BULK_ACTIONS)
