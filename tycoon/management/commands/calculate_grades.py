"""
Calculate the grades of one assignment
"""
import logging

from django.core.management.base import BaseCommand, CommandError

from tycoon.grading import tasks
from tycoon.grading.api import grades as grades_api
from tycoon.grading.errors import GradingError

log = logging.getLogger(__name__)


class Command(BaseCommand):
    """
    Calculate (or recalculate) the draft grades of every team that submitted
    work for an assignment.
    """
    help = "Calculate team grades from the investments of completed evaluations"

    def add_arguments(self, parser):
        parser.add_argument('assignment_id', type=int, help='Assignment to grade')
        parser.add_argument(
            '--async',
            action='store_true',
            dest='run_async',
            help='Queue a celery task instead of calculating in this process',
        )

    def handle(self, *args, **options):
        assignment_id = options['assignment_id']

        if options.get('run_async'):
            result = tasks.calculate_grades_task.apply_async([assignment_id])
            log.info("Created %s[%s] with arguments %s",
                     tasks.calculate_grades_task.name,
                     result.task_id,
                     [assignment_id])
            return

        try:
            grades = grades_api.calculate_grades(assignment_id)
        except GradingError as ex:
            raise CommandError(str(ex)) from ex

        self.stdout.write(f"Calculated {len(grades)} grades for assignment {assignment_id}")
        for grade in grades:
            self.stdout.write(
                f"  {grade['team_name']}: {grade['grade']} ({grade['percentage']}%), "
                f"average investment {grade['average_investment']:.2f}"
            )
