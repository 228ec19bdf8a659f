# apps/domains/results/services/applier.py
from __future__ import annotations

import logging

from django.utils import timezone

from apps.domains.results.models import TestResult
from apps.domains.submissions.locks import submission_lock
from apps.domains.submissions.models import Submission

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    submission 총점 계산 + 결과 반영
    ❌ 채점 없음 (auto_score / manual_score 는 이미 기록되어 있어야 함)

    total = Σ currentScore  (manual_score 우선, 없으면 auto_score, 둘 다 없으면 0)
    같은 입력이면 몇 번을 호출해도 같은 값 (position 순 합산)
    """

    @staticmethod
    def aggregate(submission_id: int) -> float:
        with submission_lock(submission_id) as submission:
            return ResultAggregator.apply(submission)

    @staticmethod
    def apply(submission: Submission) -> float:
        """
        호출자가 submission_lock 을 잡고 있어야 함
        """
        answers = list(submission.answers.order_by("position", "id"))

        total = 0.0
        correct = 0
        for answer in answers:
            score = answer.current_score
            total += float(score) if score is not None else 0.0
            if answer.is_correct:
                correct += 1

        max_total = float(sum(q.points for q in submission.questions))

        submission.total_score = total
        submission.save(update_fields=["total_score", "updated_at"])

        TestResult.objects.update_or_create(
            submission=submission,
            defaults={
                "user_id": submission.user_id,
                "set_id": submission.set_id,
                "score": total,
                "max_score": max_total,
                "total_questions": submission.question_count,
                "correct_answers": correct,
                "time_spent_sec": submission.duration_sec,
                "completed_at": timezone.now(),
            },
        )

        logger.info(
            "AGGREGATE submission_id=%s total=%s max=%s correct=%s/%s",
            submission.id,
            total,
            max_total,
            correct,
            submission.question_count,
        )
        return total
