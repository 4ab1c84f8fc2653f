""" API paths. """


from django.urls import path

from tycoon.api import views

urlpatterns = [
    path(
        'assignments/<int:assignment_id>/distribute/',
        views.DistributeView.as_view(),
        name='tycoon-distribute',
    ),
    path(
        'assignments/<int:assignment_id>/calculate-grades/',
        views.CalculateGradesView.as_view(),
        name='tycoon-calculate-grades',
    ),
    path(
        'assignments/<int:assignment_id>/evaluation-status/',
        views.EvaluationStatusView.as_view(),
        name='tycoon-evaluation-status',
    ),
    path(
        'assignments/auto-complete/',
        views.AutoCompleteView.as_view(),
        name='tycoon-auto-complete',
    ),
    path('grades/', views.GradeListView.as_view(), name='tycoon-grades'),
    path('grades/bulk/', views.GradeBulkView.as_view(), name='tycoon-grades-bulk'),
    path('grades/mine/', views.StudentGradesView.as_view(), name='tycoon-student-grades'),
    path('grades/<int:grade_id>/', views.GradeDetailView.as_view(), name='tycoon-grade-detail'),
    path('investments/', views.InvestmentView.as_view(), name='tycoon-investments'),
    path('evaluations/', views.StudentEvaluationsView.as_view(), name='tycoon-evaluations'),
    path('interest/', views.StudentInterestView.as_view(), name='tycoon-interest'),
]
