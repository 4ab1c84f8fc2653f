"""
Errors defined by the roster API.
"""
import copy


class RosterError(Exception):
    """An error that occurs during roster actions.

    This error is raised when the Roster API cannot perform a requested
    action.

    """


class RosterInternalError(RosterError):
    """An error internal to the Roster API has occurred.

    This error is raised when an error occurs that is not caused by incorrect
    use of the API, but rather internal implementation of the underlying
    services.

    """


class RosterRequestError(RosterError):
    """This error is raised when there was a request-specific error

    This error is reserved for problems specific to the use of the API.

    """

    def __init__(self, field_errors):  # pylint: disable=super-init-not-called
        Exception.__init__(self, repr(field_errors))  # pylint: disable=non-parent-init-called
        self.field_errors = copy.deepcopy(field_errors)


class RosterNotFoundError(RosterError):
    """This error is raised when no assignment, team or submission matches the request."""
