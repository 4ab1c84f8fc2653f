"""
Errors for evaluation distribution.
"""
from .base import EvaluationError


class EvaluationRequestError(EvaluationError):
    """Error indicating insufficient or incorrect parameters in the request.

    Raised when the request does not contain enough information, or incorrect
    information which does not allow the request to be processed, for example
    an evaluation count outside the allowed range.

    """


class EvaluationNotFoundError(EvaluationError):
    """Error indicating that the assignment or evaluation does not exist."""


class EvaluationWorkflowError(EvaluationError):
    """Error indicating a step in the evaluation workflow cannot be completed.

    Raised when the action taken cannot be completed given the current state
    of the assignment, its teams and its submissions.

    """


class AlreadyDistributedError(EvaluationWorkflowError):
    """Raised when evaluations were already distributed for the assignment.

    Distribution runs at most once per assignment.

    """


class InsufficientTeamsError(EvaluationWorkflowError):
    """Raised when too few teams submitted work.

    Every student must be able to evaluate the requested number of
    distinct teams other than their own.

    """


class EvaluationInternalError(EvaluationError):
    """Error indicating an internal problem independent of API use.

    Raised when an internal error has occurred. This should be independent of
    the actions or parameters given to the API.

    """
