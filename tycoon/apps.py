"""
tycoon Django application initialization.
"""

from django.apps import AppConfig


class TycoonConfig(AppConfig):
    """
    Configuration for the tycoon Django application.
    """

    name = "tycoon"
