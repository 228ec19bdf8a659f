# apps/domains/submissions/models/submission_answer.py
from __future__ import annotations

from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel


class SubmissionAnswer(TimestampModel):
    """
    (submission, question) 당 1행

    - 객관식: auto_score / is_correct 만 사용, manual_score 는 항상 NULL
    - 주관식: auto_score / is_correct 는 항상 NULL, 채점자가 manual_score 기록
    - question_type / skill / max_points / position 은 snapshot 에서 복사 (큐 조회용)
    """

    submission = models.ForeignKey(
        "submissions.Submission",
        on_delete=models.PROTECT,
        related_name="answers",
    )

    question_id = models.PositiveBigIntegerField()
    position = models.PositiveIntegerField(default=0)

    question_type = models.CharField(max_length=30)
    skill = models.CharField(max_length=30, blank=True)
    max_points = models.PositiveIntegerField(default=1)

    # 선택지 id / id 목록 / 자유 텍스트 / 미디어 참조
    answer_data = models.JSONField(null=True, blank=True)

    # 클라이언트 보고값 (채점에는 미사용)
    time_spent_sec = models.PositiveIntegerField(null=True, blank=True)
    attempts = models.PositiveIntegerField(null=True, blank=True)

    auto_score = models.FloatField(null=True, blank=True)
    manual_score = models.FloatField(null=True, blank=True)
    is_correct = models.BooleanField(null=True, blank=True)

    comment = models.TextField(blank=True)
    # 루브릭 채점: 항목별 점수 원본 보관, 합산은 manual_score
    rubric_id = models.CharField(max_length=64, blank=True)
    scores = models.JSONField(null=True, blank=True)
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="graded_answers",
    )
    graded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "submissions_answer"
        indexes = [
            models.Index(fields=["submission", "question_type"], name="submissions_answer_type_idx"),
        ]
        unique_together = ("submission", "question_id")
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return f"SubmissionAnswer(submission={self.submission_id}, q={self.question_id})"

    @property
    def current_score(self) -> float | None:
        if self.manual_score is not None:
            return self.manual_score
        return self.auto_score
