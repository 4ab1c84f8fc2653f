"""
tycoon.evaluation Django application initialization.
"""

from django.apps import AppConfig


class TycoonEvaluationConfig(AppConfig):
    """
    Configuration for the tycoon.evaluation Django application.
    """

    name = "tycoon.evaluation"
    label = "evaluation"
