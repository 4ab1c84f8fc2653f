"""
Celery task wrappers for grade calculation
"""

from celery import shared_task
from django.db import DatabaseError

from tycoon.grading.errors import GradingInternalError
from tycoon.roster.errors import RosterInternalError


@shared_task(bind=True,
             acks_late=True,
             autoretry_for=(GradingInternalError, DatabaseError),
             max_retries=3,
             retry_backoff=True,
             retry_backoff_max=500,
             retry_jitter=True)
def calculate_grades_task(self, assignment_id):  # pylint: disable=unused-argument
    """
    Async task wrapper
    """
    from tycoon.grading.api.grades import calculate_grades
    return calculate_grades(assignment_id)


@shared_task(bind=True,
             acks_late=True,
             autoretry_for=(RosterInternalError, DatabaseError),
             max_retries=3,
             retry_backoff=True,
             retry_backoff_max=300,
             retry_jitter=True)
def complete_expired_assignments_task(self):  # pylint: disable=unused-argument
    """
    Async task wrapper
    """
    from tycoon.grading.api.grades import complete_expired_assignments
    return complete_expired_assignments()
