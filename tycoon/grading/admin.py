""" Admin file of grading app """


from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from .models import Grade, InterestRecord


class GradeAdmin(SimpleHistoryAdmin):
    """
    Admin for Grades, with the change history of every grade.
    """
    list_display = (
        'id', 'assignment', 'team', 'grade', 'percentage', 'average_investment', 'status', 'manual_override'
    )
    list_filter = ('status', 'grade', 'manual_override')
    search_fields = ('team__name', 'assignment__title')
    readonly_fields = ('original_grade', 'original_percentage', 'reviewed_by', 'reviewed_at', 'published_at')


class InterestRecordAdmin(admin.ModelAdmin):
    """
    Admin for InterestRecords.
    """
    list_display = ('id', 'student_id', 'assignment', 'team', 'tokens_invested', 'performance_tier',
                    'interest_earned')
    list_filter = ('performance_tier',)
    search_fields = ('student_id',)


admin.site.register(Grade, GradeAdmin)
admin.site.register(InterestRecord, InterestRecordAdmin)
