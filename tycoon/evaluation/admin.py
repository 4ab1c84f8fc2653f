"""
Django admin models for peer evaluation.
"""
from django.contrib import admin

from tycoon.evaluation.models import EvaluationAssignment, EvaluationDistribution, Investment


class EvaluationAssignmentAdmin(admin.ModelAdmin):
    """
    Django admin model for EvaluationAssignments.
    """
    list_display = ('id', 'assignment', 'evaluator_id', 'evaluated_team', 'status', 'completed_at')
    list_filter = ('status',)
    search_fields = ('evaluator_id', 'evaluated_team__name')
    readonly_fields = ('assignment', 'evaluator_id', 'evaluated_team', 'submission')


class EvaluationDistributionAdmin(admin.ModelAdmin):
    """
    Django admin model for EvaluationDistributions.

    Deleting a distribution here does not remove its evaluation assignments.
    """
    list_display = ('assignment', 'evaluations_per_student', 'distributed_by', 'created_at')


class InvestmentAdmin(admin.ModelAdmin):
    """
    Django admin model for Investments. Investments are immutable.
    """
    list_display = ('id', 'assignment', 'investor_id', 'team', 'tokens', 'rank')
    search_fields = ('investor_id', 'team__name')
    readonly_fields = ('assignment', 'investor_id', 'team', 'tokens', 'rank')


admin.site.register(EvaluationAssignment, EvaluationAssignmentAdmin)
admin.site.register(EvaluationDistribution, EvaluationDistributionAdmin)
admin.site.register(Investment, InvestmentAdmin)
