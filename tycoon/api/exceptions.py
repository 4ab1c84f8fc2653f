"""
Translate errors raised by the tycoon APIs into HTTP responses.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from tycoon.evaluation.errors import (
    EvaluationInternalError,
    EvaluationNotFoundError,
    EvaluationRequestError,
    EvaluationWorkflowError,
    InvestmentInternalError,
    InvestmentRequestError,
    InvestmentWorkflowError,
)
from tycoon.grading.errors import GradingInternalError, GradingNotFoundError, GradingRequestError
from tycoon.roster.errors import RosterInternalError, RosterNotFoundError, RosterRequestError

logger = logging.getLogger("tycoon.api.exceptions")  # pylint: disable=invalid-name

# Checked in order; the first matching class decides the response.
ERROR_RESPONSES = (
    (EvaluationWorkflowError, status.HTTP_409_CONFLICT, "conflict"),
    ((EvaluationRequestError, InvestmentRequestError, InvestmentWorkflowError,
      GradingRequestError, RosterRequestError), status.HTTP_400_BAD_REQUEST, "bad_request"),
    ((EvaluationNotFoundError, GradingNotFoundError, RosterNotFoundError), status.HTTP_404_NOT_FOUND, "not_found"),
    ((EvaluationInternalError, InvestmentInternalError, GradingInternalError, RosterInternalError),
     status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"),
)


def tycoon_exception_handler(exc, context):
    """
    Render tycoon errors as `{"error": ..., "message": ...}` bodies.

    Anything else is left to the default DRF handler, which returns None for
    exceptions it does not know so that Django reports them as server errors.
    """
    for error_classes, status_code, error in ERROR_RESPONSES:
        if isinstance(exc, error_classes):
            if status_code >= 500:
                logger.error("Internal error handling %s: %s", context.get("view").__class__.__name__, exc)
            body = {"error": error, "message": str(exc)}
            field_errors = getattr(exc, "field_errors", None)
            if field_errors:
                body["field_errors"] = field_errors
            return Response(body, status=status_code)
    return exception_handler(exc, context)
