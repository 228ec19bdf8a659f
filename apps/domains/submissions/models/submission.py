# apps/domains/submissions/models/submission.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from apps.api.common.models import TimestampModel
from src.application.ports.question_catalog import QuestionSnapshot


class Submission(TimestampModel):
    """
    submissions = "한 사용자의 한 세트 1회 응시"

    상태 전이 (역방향 없음):
      in_progress → submitted → completed
      in_progress → completed   (주관식 없는 세트는 submit 한 번에 완료)

    - submit_time 은 status != in_progress 일 때만 존재하며 이후 불변
    - question_snapshot 은 start 시점 세트 구성 (이후 세트/문항 수정과 무관)
    - total_score 는 ResultAggregator 만 기록
    """

    class Status(models.TextChoices):
        IN_PROGRESS = "in_progress", "In progress"
        SUBMITTED = "submitted", "Submitted"
        COMPLETED = "completed", "Completed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="submissions",
    )

    # questions.TestSet id (FK 강제 X, catalog 는 외부 협력자)
    set_id = models.PositiveBigIntegerField()

    # (user, set) 기준 1부터 시작
    attempt = models.PositiveIntegerField(default=1)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.IN_PROGRESS,
    )

    question_snapshot = models.JSONField(default=list, blank=True)

    started_at = models.DateTimeField(default=timezone.now)
    submit_time = models.DateTimeField(null=True, blank=True)
    duration_sec = models.PositiveIntegerField(null=True, blank=True)

    total_score = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = "submissions_submission"
        indexes = [
            models.Index(fields=["user", "set_id"], name="submissions_user_set_idx"),
            models.Index(fields=["status", "submit_time"], name="submissions_status_time_idx"),
        ]
        constraints = [
            # 동시 start 경합 시 DB 가 최종 판정 (in_progress 는 (user, set) 당 1개)
            models.UniqueConstraint(
                fields=["user", "set_id"],
                condition=Q(status="in_progress"),
                name="uniq_submission_in_progress_per_set",
            ),
            models.UniqueConstraint(
                fields=["user", "set_id", "attempt"],
                name="uniq_submission_attempt",
            ),
            models.CheckConstraint(
                condition=(
                    Q(status="in_progress", submit_time__isnull=True)
                    | (~Q(status="in_progress") & Q(submit_time__isnull=False))
                ),
                name="submission_submit_time_matches_status",
            ),
        ]
        ordering = ["-id"]

    def __str__(self) -> str:
        return (
            f"Submission({self.id}) set={self.set_id} "
            f"user={self.user_id} #{self.attempt} [{self.status}]"
        )

    @property
    def questions(self) -> list[QuestionSnapshot]:
        return [QuestionSnapshot.from_dict(q) for q in (self.question_snapshot or [])]

    @property
    def question_count(self) -> int:
        return len(self.question_snapshot or [])

    def snapshot_question(self, question_id: int) -> QuestionSnapshot | None:
        for data in self.question_snapshot or []:
            if int(data.get("id")) == int(question_id):
                return QuestionSnapshot.from_dict(data)
        return None

    def snapshot_position(self, question_id: int) -> int:
        for index, data in enumerate(self.question_snapshot or []):
            if int(data.get("id")) == int(question_id):
                return index
        return len(self.question_snapshot or [])
