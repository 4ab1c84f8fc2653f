"""
tycoon.grading Django application initialization.
"""

from django.apps import AppConfig


class TycoonGradingConfig(AppConfig):
    """
    Configuration for the tycoon.grading Django application.
    """

    name = "tycoon.grading"
    label = "grading"
