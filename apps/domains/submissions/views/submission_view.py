# apps/domains/submissions/views/submission_view.py
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_yasg.utils import swagger_auto_schema
from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from apps.core.permissions import is_owner
from apps.domains.submissions.models import Submission
from apps.domains.submissions.serializers.submission import (
    AnswerRecordSerializer,
    SubmissionDetailSerializer,
    SubmissionSerializer,
    SubmissionStartSerializer,
)
from apps.domains.submissions.services.submission_service import SubmissionService


class SubmissionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    GenericViewSet,
):
    """
    학생 응시 API

    POST /submissions/                               start
    GET  /submissions/                               내 응시 목록
    GET  /submissions/{id}/                          snapshot + 답안
    PUT  /submissions/{id}/answers/{question_id}/    record_answer
    POST /submissions/{id}/submit/                   submit
    """

    permission_classes = [IsAuthenticated]
    queryset = Submission.objects.all()
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        qs = Submission.objects.all().order_by("-id")
        if self.action == "list":
            qs = qs.filter(user=self.request.user)
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return SubmissionDetailSerializer
        return SubmissionSerializer

    def get_object(self):
        submission = get_object_or_404(Submission, pk=self.kwargs["pk"])
        user = self.request.user
        if is_owner(user, submission):
            return submission
        # 채점자는 조회만 가능 (답안 기록 / 제출은 본인만)
        if self.action == "retrieve" and getattr(user, "is_grader", False):
            return submission
        raise PermissionDenied("Not your submission.")

    @swagger_auto_schema(request_body=SubmissionStartSerializer, responses={201: SubmissionSerializer})
    def create(self, request, *args, **kwargs):
        serializer = SubmissionStartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        user_id = serializer.validated_data.get("user_id")
        if user_id and user_id != user.id:
            if not getattr(user, "is_grader", False):
                raise PermissionDenied("Cannot start an attempt for another user.")
            user = get_object_or_404(get_user_model(), pk=user_id)

        submission = SubmissionService().start(
            user=user,
            set_id=serializer.validated_data["set_id"],
        )
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(method="put", request_body=AnswerRecordSerializer, responses={204: "recorded"})
    @action(detail=True, methods=["put"], url_path=r"answers/(?P<question_id>\d+)")
    def answer(self, request, pk=None, question_id=None):
        submission = self.get_object()

        serializer = AnswerRecordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        SubmissionService().record_answer(
            submission_id=submission.id,
            question_id=int(question_id),
            answer_data=serializer.validated_data.get("answer_data"),
            time_spent_sec=serializer.validated_data.get("time_spent_sec"),
            attempts=serializer.validated_data.get("attempts"),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @swagger_auto_schema(method="post", responses={200: SubmissionSerializer})
    @action(detail=True, methods=["post"])
    def submit(self, request, pk=None):
        submission = self.get_object()
        submission = SubmissionService().submit(submission_id=submission.id)
        return Response(SubmissionSerializer(submission).data)
