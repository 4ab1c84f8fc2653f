"""
Errors for token investments.
"""
from .base import EvaluationError


class InvestmentError(EvaluationError):
    """Generic Investment Error

    Raised when an error occurs while processing a request related to
    investing tokens in a team.

    """


class InvestmentRequestError(InvestmentError):
    """Error indicating insufficient or incorrect parameters in the request."""


class InvestmentWorkflowError(InvestmentError):
    """Error indicating the investment is not allowed in the current state.

    Raised when the investor is not assigned to the team, has already
    invested in it, or would exceed their token budget.

    """


class InvestmentInternalError(InvestmentError):
    """Error indicating an internal problem independent of API use."""
