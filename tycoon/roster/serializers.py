"""
Serializers are created to ensure models do not have to be accessed outside the
scope of the Tycoon APIs.
"""
from rest_framework import serializers

from tycoon.roster.models import Assignment, Submission, Team


class AssignmentSerializer(serializers.ModelSerializer):
    """
    Serialize an `Assignment` model.
    """

    class Meta:
        model = Assignment
        fields = (
            'id',
            'course_id',
            'title',
            'description',
            'document_url',
            'start_date',
            'due_date',
            'evaluation_start_date',
            'evaluation_due_date',
            'is_active',
            'is_evaluation_active',
            'evaluations_per_student',
            'created',
            'modified',
        )
        read_only_fields = ('is_evaluation_active', 'created', 'modified')

    def validate(self, attrs):
        due_date = attrs.get('due_date')
        evaluation_due_date = attrs.get('evaluation_due_date')
        evaluation_start_date = attrs.get('evaluation_start_date')

        if due_date and evaluation_due_date and evaluation_due_date < due_date:
            raise serializers.ValidationError(
                {'evaluation_due_date': "Evaluation must be due after the submission due date."}
            )
        if evaluation_start_date and evaluation_due_date and evaluation_due_date < evaluation_start_date:
            raise serializers.ValidationError(
                {'evaluation_due_date': "Evaluation must be due after it starts."}
            )
        return attrs


class TeamSerializer(serializers.ModelSerializer):
    """
    Serialize a `Team` model along with the ids of its members.
    """
    members = serializers.SerializerMethodField()

    def get_members(self, obj):
        return sorted(obj.member_ids)

    class Meta:
        model = Team
        fields = (
            'id',
            'course_id',
            'assignment',
            'name',
            'description',
            'members',
            'created',
        )


class SubmissionSerializer(serializers.ModelSerializer):
    """
    Serialize a `Submission` model.
    """

    class Meta:
        model = Submission
        fields = (
            'id',
            'assignment',
            'team',
            'status',
            'submitted_at',
            'primary_link',
            'backup_link',
            'created',
        )
