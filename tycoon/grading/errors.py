"""
Errors defined by the grading API.
"""


class GradingError(Exception):
    """An error that occurs while calculating or reviewing grades."""


class GradingRequestError(GradingError):
    """Error indicating insufficient or incorrect parameters in the request.

    Raised for unknown bulk actions, grade values outside the allowed
    bands, or an assignment with no submitted work to grade.

    """


class GradingNotFoundError(GradingError):
    """Error indicating that the assignment or grade does not exist."""


class GradingInternalError(GradingError):
    """An error internal to the Grading API has occurred.

    This error is raised when an error occurs that is not caused by incorrect
    use of the API, but rather internal implementation of the underlying
    services.

    """
