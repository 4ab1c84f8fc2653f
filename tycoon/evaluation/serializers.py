"""
Serializers for evaluation assignments and investments.
"""
from rest_framework import serializers

from tycoon.evaluation.models import EvaluationAssignment, Investment


class EvaluationAssignmentSerializer(serializers.ModelSerializer):
    """
    Serialize an `EvaluationAssignment` model.
    """
    team_name = serializers.CharField(source='evaluated_team.name', read_only=True)

    class Meta:
        model = EvaluationAssignment
        fields = (
            'id',
            'assignment',
            'evaluator_id',
            'evaluated_team',
            'team_name',
            'submission',
            'status',
            'due_at',
            'completed_at',
            'created',
        )


class InvestmentSerializer(serializers.ModelSerializer):
    """
    Serialize an `Investment` model.
    """

    class Meta:
        model = Investment
        fields = (
            'id',
            'assignment',
            'investor_id',
            'team',
            'tokens',
            'rank',
            'created',
        )
