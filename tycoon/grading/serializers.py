"""
Serializers for grades and interest records.
"""
from rest_framework import serializers

from tycoon.grading.models import Grade, InterestRecord


class GradeSerializer(serializers.ModelSerializer):
    """
    Serialize a `Grade` model.
    """
    team_name = serializers.CharField(source='team.name', read_only=True)

    class Meta:
        model = Grade
        fields = (
            'id',
            'assignment',
            'team',
            'team_name',
            'submission',
            'average_investment',
            'grade',
            'percentage',
            'total_investments',
            'status',
            'admin_notes',
            'manual_override',
            'original_grade',
            'original_percentage',
            'reviewed_by',
            'reviewed_at',
            'published_at',
            'created',
            'modified',
        )


class InterestRecordSerializer(serializers.ModelSerializer):
    """
    Serialize an `InterestRecord` model.
    """

    class Meta:
        model = InterestRecord
        fields = (
            'student_id',
            'assignment',
            'team',
            'tokens_invested',
            'performance_tier',
            'interest_earned',
        )
