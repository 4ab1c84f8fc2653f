"""
Tycoon REST API.

Admin views require a staff user; student views act on behalf of the
authenticated user, whose primary key is the student id used by the roster.
Successful responses have the shape `{"success": true, "data": ...}`; errors
are rendered by `tycoon.api.exceptions.tycoon_exception_handler`.
"""
from rest_framework import status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from tycoon.api.serializers import (
    BulkGradeSerializer,
    DistributeRequestSerializer,
    GradeUpdateSerializer,
    InvestmentRequestSerializer,
)
from tycoon.evaluation.api import distribution as distribution_api
from tycoon.evaluation.api import investment as investment_api
from tycoon.grading.api import grades as grades_api
from tycoon.grading.api import interest as interest_api
from tycoon.grading.errors import GradingRequestError


def _success(data, status_code=status.HTTP_200_OK):
    return Response({"success": True, "data": data}, status=status_code)


def _student_id(request):
    return str(request.user.pk)


def _optional_int(request, name):
    value = request.query_params.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError as ex:
        raise GradingRequestError(f"'{name}' must be a number") from ex


class AdminAPIView(APIView):
    permission_classes = (IsAdminUser,)
    throttle_scope = "api"


class StudentAPIView(APIView):
    permission_classes = (IsAuthenticated,)
    throttle_scope = "api"


class DistributeView(AdminAPIView):
    """
    Check or trigger the distribution of peer evaluations for an assignment.

    **Example Requests**

        GET /api/assignments/{assignment_id}/distribute/
        POST /api/assignments/{assignment_id}/distribute/ {"evaluations_per_student": 3}

    **Returns**

        * 200 with "is_distributed" on GET.
        * 201 with the number of evaluations created on POST.
        * 400 if the evaluation count is out of range.
        * 404 if the assignment does not exist.
        * 409 if the assignment was already distributed or too few teams submitted.

    """
    throttle_scope = "admin_action"

    def get(self, request, assignment_id):
        return _success({
            "assignment_id": assignment_id,
            "is_distributed": distribution_api.is_distributed(assignment_id),
        })

    def post(self, request, assignment_id):
        serializer = DistributeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        evaluations = distribution_api.distribute(
            assignment_id,
            evaluations_per_student=serializer.validated_data.get("evaluations_per_student"),
            requested_by=request.user.get_username(),
        )
        evaluators = {evaluation["evaluator_id"] for evaluation in evaluations}
        return _success(
            {
                "assignment_id": assignment_id,
                "total_evaluations": len(evaluations),
                "evaluations_per_student": len(evaluations) // len(evaluators) if evaluators else 0,
            },
            status_code=status.HTTP_201_CREATED,
        )


class CalculateGradesView(AdminAPIView):
    """
    GET returns the grade statistics of an assignment; POST recalculates its
    grades first.
    """
    throttle_scope = "admin_action"

    def get(self, request, assignment_id):
        return _success({"statistics": grades_api.get_grade_statistics(assignment_id)})

    def post(self, request, assignment_id):
        grades = grades_api.calculate_grades(assignment_id)
        return _success({
            "grades": grades,
            "statistics": grades_api.get_grade_statistics(assignment_id),
        })


class EvaluationStatusView(AdminAPIView):

    def get(self, request, assignment_id):
        return _success(distribution_api.get_evaluation_status(assignment_id))


class AutoCompleteView(AdminAPIView):
    """
    Close every expired evaluation phase and grade the closed assignments.
    """
    throttle_scope = "admin_action"

    def post(self, request):
        completed = grades_api.complete_expired_assignments()
        return _success({"completed": completed, "count": len(completed)})


class GradeListView(AdminAPIView):
    """
    List the grades of an assignment.

    **Example Requests**

        GET /api/grades/?assignment_id=12&status=draft

    """

    def get(self, request):
        assignment_id = _optional_int(request, "assignment_id")
        if assignment_id is None:
            raise GradingRequestError("'assignment_id' is required")
        return _success({
            "grades": grades_api.get_grades(assignment_id, status=request.query_params.get("status")),
            "statistics": grades_api.get_grade_statistics(assignment_id),
        })


class GradeDetailView(AdminAPIView):
    """
    Override, annotate, approve or publish a single grade.
    """

    def put(self, request, grade_id):
        serializer = GradeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        grade = grades_api.override_grade(grade_id, request.user.get_username(), **serializer.validated_data)
        return _success(grade)


class GradeBulkView(AdminAPIView):
    """
    Publish, unpublish or reset several grades at once.
    """

    def post(self, request):
        serializer = BulkGradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = grades_api.bulk_update_grades(
            serializer.validated_data["grade_ids"],
            serializer.validated_data["action"],
            request.user.get_username(),
        )
        return _success({"updated": updated, "action": serializer.validated_data["action"]})


class InvestmentView(StudentAPIView):
    """
    List or make the requesting student's investments.

    **Example Requests**

        GET /api/investments/?assignment_id=12
        POST /api/investments/ {"assignment_id": 12, "team_id": 3, "tokens": 40}

    """

    def get(self, request):
        assignment_id = _optional_int(request, "assignment_id")
        if assignment_id is None:
            raise GradingRequestError("'assignment_id' is required")
        student_id = _student_id(request)
        return _success({
            "investments": investment_api.get_student_investments(student_id, assignment_id),
            "remaining_tokens": investment_api.get_remaining_tokens(student_id, assignment_id),
        })

    def post(self, request):
        serializer = InvestmentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student_id = _student_id(request)
        investment = investment_api.invest(
            serializer.validated_data["assignment_id"],
            student_id,
            serializer.validated_data["team_id"],
            serializer.validated_data["tokens"],
        )
        return _success(
            {
                "investment": investment,
                "remaining_tokens": investment_api.get_remaining_tokens(
                    student_id, serializer.validated_data["assignment_id"]
                ),
            },
            status_code=status.HTTP_201_CREATED,
        )


class StudentEvaluationsView(StudentAPIView):

    def get(self, request):
        return _success(
            distribution_api.get_student_evaluations(
                _student_id(request), assignment_id=_optional_int(request, "assignment_id")
            )
        )


class StudentInterestView(StudentAPIView):
    """
    The requesting student's accumulated interest and grade bonus.
    """

    def get(self, request):
        student_id = _student_id(request)
        summary = interest_api.get_total_student_interest(student_id)
        summary["records"] = interest_api.get_student_interest_records(
            student_id, assignment_id=_optional_int(request, "assignment_id")
        )
        return _success(summary)


class StudentGradesView(StudentAPIView):

    def get(self, request):
        return _success(grades_api.get_student_grades(_student_id(request)))
