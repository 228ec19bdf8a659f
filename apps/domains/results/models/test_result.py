# apps/domains/results/models/test_result.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.api.common.models import TimestampModel


class TestResult(TimestampModel):
    """
    완료된 submission 당 결과 1행 (ResultAggregator 만 기록)

    - score 는 submission.total_score 와 항상 동일
    - 재채점(completed 이후 grade) 시 같은 행을 갱신
    """

    __test__ = False  # pytest 수집 대상 아님

    submission = models.OneToOneField(
        "submissions.Submission",
        on_delete=models.CASCADE,
        related_name="test_result",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="test_results",
    )
    set_id = models.PositiveBigIntegerField()

    score = models.FloatField(default=0.0)
    max_score = models.FloatField(default=0.0)

    total_questions = models.PositiveIntegerField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)

    time_spent_sec = models.PositiveIntegerField(null=True, blank=True)
    completed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "results_test_result"
        indexes = [
            models.Index(fields=["user", "completed_at"], name="results_user_done_idx"),
            models.Index(fields=["set_id", "score"], name="results_set_score_idx"),
        ]
        ordering = ["-completed_at", "-id"]

    def __str__(self) -> str:
        return f"TestResult(submission={self.submission_id}) {self.score}/{self.max_score}"
