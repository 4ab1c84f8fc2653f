"""
Close expired evaluation phases and grade them
"""
import logging

from django.core.management.base import BaseCommand

from tycoon.grading import tasks
from tycoon.grading.api import grades as grades_api

log = logging.getLogger(__name__)


class Command(BaseCommand):
    """
    Close every evaluation phase whose due date has passed and calculate the
    grades of the closed assignments. Meant to be run periodically.
    """
    help = "Close expired evaluation phases and calculate their grades"

    def add_arguments(self, parser):
        parser.add_argument(
            '--async',
            action='store_true',
            dest='run_async',
            help='Queue a celery task instead of running in this process',
        )

    def handle(self, *args, **options):
        if options.get('run_async'):
            result = tasks.complete_expired_assignments_task.apply_async()
            log.info("Created %s[%s]", tasks.complete_expired_assignments_task.name, result.task_id)
            return

        completed = grades_api.complete_expired_assignments()
        if not completed:
            self.stdout.write("No expired evaluation phases")
            return

        for assignment in completed:
            self.stdout.write(
                f"Closed assignment {assignment['id']} ({assignment['title']}), "
                f"{assignment['grades_calculated']} grades calculated"
            )
