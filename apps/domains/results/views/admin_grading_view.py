# PATH: apps/domains/results/views/admin_grading_view.py
from __future__ import annotations

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsAdminOrStaff
from apps.domains.results.serializers.grading import (
    GradingQueueQuerySerializer,
    GradingQueueRowSerializer,
    ManualGradeSerializer,
    ReviewSerializer,
)
from apps.domains.results.services.grading_service import GradingService
from apps.domains.submissions.serializers.submission import SubmissionSerializer

logger = logging.getLogger(__name__)


class GradingQueueView(APIView):
    """
    GET /admin/submissions/?status=submitted&skill=writing
    """
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter("status", openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter("skill", openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ],
        responses={200: GradingQueueRowSerializer(many=True)},
    )
    def get(self, request):
        query = GradingQueueQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        rows = GradingService().list_pending_queue(skill=query.validated_data.get("skill"))
        return Response(GradingQueueRowSerializer(rows, many=True).data)


class SubmissionReviewView(APIView):
    """
    GET /admin/submissions/{id}/answers/
    """
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    @swagger_auto_schema(responses={200: ReviewSerializer})
    def get(self, request, submission_id: int):
        data = GradingService().get_answers_for_review(submission_id=submission_id)
        return Response(ReviewSerializer(data).data)


class ManualGradeView(APIView):
    """
    POST /admin/grade/
    { submission_id, question_id, manual_score, comment, rubric_id?, scores? }
    """
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    @swagger_auto_schema(request_body=ManualGradeSerializer, responses={204: "graded"})
    def post(self, request):
        serializer = ManualGradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        GradingService().grade(
            submission_id=v["submission_id"],
            question_id=v["question_id"],
            manual_score=v["manual_score"],
            comment=v.get("comment", ""),
            grader=request.user,
            rubric_id=v.get("rubric_id"),
            scores=v.get("scores"),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class ForceCompleteView(APIView):
    """
    POST /admin/submissions/{id}/complete/
    미채점 주관식은 0점으로 계산하고 완료 처리
    """
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    @swagger_auto_schema(responses={200: SubmissionSerializer})
    def post(self, request, submission_id: int):
        submission = GradingService().complete(submission_id=submission_id)
        logger.info(
            "FORCE_COMPLETE submission_id=%s by user_id=%s",
            submission.id,
            request.user.id,
        )
        return Response(SubmissionSerializer(submission).data)
