"""
tycoon.roster Django application initialization.
"""

from django.apps import AppConfig


class TycoonRosterConfig(AppConfig):
    """
    Configuration for the tycoon.roster Django application.
    """

    name = "tycoon.roster"
    label = "roster"
