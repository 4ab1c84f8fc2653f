""" Admin file of roster app """


from django.contrib import admin

from .models import Assignment, Submission, Team, TeamMember


class TeamMemberInline(admin.TabularInline):
    """Members of a team"""
    model = TeamMember
    extra = 0


class TeamAdmin(admin.ModelAdmin):
    """
    Admin for Teams.
    """
    list_display = ('id', 'name', 'course_id', 'assignment', 'created')
    list_filter = ('course_id',)
    search_fields = ('name', 'course_id', 'members__student_id')
    inlines = (TeamMemberInline,)


class AssignmentAdmin(admin.ModelAdmin):
    """
    Admin for Assignments.

    The evaluation flag is editable so that staff can reopen or close an
    evaluation phase by hand.
    """
    list_display = (
        'id', 'title', 'course_id', 'due_date', 'evaluation_due_date', 'is_active', 'is_evaluation_active'
    )
    list_filter = ('is_active', 'is_evaluation_active', 'course_id')
    search_fields = ('title', 'course_id')


class SubmissionAdmin(admin.ModelAdmin):
    """
    Admin for Submissions.
    """
    list_display = ('id', 'assignment', 'team', 'status', 'submitted_at')
    list_filter = ('status',)
    search_fields = ('team__name', 'assignment__title')


admin.site.register(Assignment, AssignmentAdmin)
admin.site.register(Team, TeamAdmin)
admin.site.register(Submission, SubmissionAdmin)
