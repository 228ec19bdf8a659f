# apps/domains/submissions/services/submission_service.py
"""
Submission 라이프사이클 (상태 전이의 유일한 진입점)

  start                    : (없음)        → in_progress
  record_answer            : in_progress   → in_progress
  submit                   : in_progress   → submitted | completed
  complete_if_fully_graded : submitted     → completed  (주관식 전부 채점된 경우만)

- start 이후 모든 연산은 submission_lock 구간 안에서 수행
- 문항 구성은 start 시점 snapshot 기준 (catalog 재조회 X)
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone

from apps.domains.results.services.applier import ResultAggregator
from apps.domains.results.services.grader import score_or_zero
from apps.domains.submissions.exceptions import (
    DuplicateAttempt,
    NotFound,
    SubmissionClosed,
)
from apps.domains.submissions.locks import submission_lock
from apps.domains.submissions.models import Submission, SubmissionAnswer
from src.application.ports.question_catalog import (
    SUBJECTIVE_TYPES,
    IQuestionCatalog,
    QuestionSnapshot,
)
from src.infrastructure.db.question_catalog import get_question_catalog

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(self, catalog: Optional[IQuestionCatalog] = None):
        self.catalog = catalog or get_question_catalog()

    # ------------------------------------------------------------
    # start
    # ------------------------------------------------------------
    def start(self, *, user, set_id: int) -> Submission:
        questions = self.catalog.get_questions_for_set(int(set_id))

        with transaction.atomic():
            in_progress = Submission.objects.filter(
                user=user,
                set_id=set_id,
                status=Submission.Status.IN_PROGRESS,
            )
            if in_progress.exists():
                raise DuplicateAttempt()

            last_attempt = (
                Submission.objects
                .filter(user=user, set_id=set_id)
                .aggregate(m=Max("attempt"))
                .get("m")
            ) or 0

            # 동시 start 경합은 partial unique constraint 가 판정
            try:
                with transaction.atomic():
                    submission = Submission.objects.create(
                        user=user,
                        set_id=int(set_id),
                        attempt=int(last_attempt) + 1,
                        status=Submission.Status.IN_PROGRESS,
                        question_snapshot=[q.to_dict() for q in questions],
                        started_at=timezone.now(),
                    )
            except IntegrityError as e:
                logger.warning(
                    "SUBMISSION start race lost user_id=%s set_id=%s",
                    getattr(user, "id", None),
                    set_id,
                )
                raise DuplicateAttempt() from e

        logger.info(
            "SUBMISSION started submission_id=%s user_id=%s set_id=%s attempt=%s questions=%s",
            submission.id,
            submission.user_id,
            submission.set_id,
            submission.attempt,
            len(questions),
        )
        return submission

    # ------------------------------------------------------------
    # record_answer
    # ------------------------------------------------------------
    def record_answer(
        self,
        *,
        submission_id: int,
        question_id: int,
        answer_data: Any,
        time_spent_sec: Optional[int] = None,
        attempts: Optional[int] = None,
    ) -> SubmissionAnswer:
        with submission_lock(submission_id) as submission:
            if submission.status != Submission.Status.IN_PROGRESS:
                raise SubmissionClosed()

            question = self.question_for(submission, question_id)

            answer, _ = SubmissionAnswer.objects.update_or_create(
                submission=submission,
                question_id=question.id,
                defaults={
                    "answer_data": answer_data,
                    **_provided(time_spent_sec=time_spent_sec, attempts=attempts),
                    **self._denormalized(submission, question),
                },
            )
            return answer

    # ------------------------------------------------------------
    # submit
    # ------------------------------------------------------------
    def submit(self, *, submission_id: int) -> Submission:
        with submission_lock(submission_id) as submission:
            if submission.status != Submission.Status.IN_PROGRESS:
                raise SubmissionClosed()

            now = timezone.now()
            submission.submit_time = now
            submission.duration_sec = max(0, int((now - submission.started_at).total_seconds()))
            submission.status = Submission.Status.SUBMITTED

            existing = {a.question_id: a for a in submission.answers.all()}
            questions = submission.questions

            for question in questions:
                answer = existing.get(question.id)
                if answer is None:
                    # 미응답 문항도 행을 만든다 (0점 / 채점 대기)
                    answer = SubmissionAnswer(
                        submission=submission,
                        question_id=question.id,
                        answer_data=None,
                    )
                for field, value in self._denormalized(submission, question).items():
                    setattr(answer, field, value)

                if question.is_objective:
                    result = score_or_zero(question, answer.answer_data, submission_id=submission.id)
                    answer.auto_score = result.auto_score
                    answer.is_correct = result.is_correct
                    answer.manual_score = None
                else:
                    answer.auto_score = None
                    answer.is_correct = None

                answer.save()

            submission.save(
                update_fields=["status", "submit_time", "duration_sec", "updated_at"]
            )

            if not any(q.is_subjective for q in questions):
                self.finalize_locked(submission)
            else:
                logger.info(
                    "SUBMISSION submitted submission_id=%s pending_subjective=%s",
                    submission.id,
                    sum(1 for q in questions if q.is_subjective),
                )

            return submission

    # ------------------------------------------------------------
    # complete_if_fully_graded
    # ------------------------------------------------------------
    def complete_if_fully_graded(self, *, submission_id: int) -> bool:
        with submission_lock(submission_id) as submission:
            return self.complete_if_fully_graded_locked(submission)

    def complete_if_fully_graded_locked(self, submission: Submission) -> bool:
        """
        호출자가 submission_lock 을 잡고 있어야 함
        """
        if submission.status != Submission.Status.SUBMITTED:
            return False

        pending = submission.answers.filter(
            question_type__in=SUBJECTIVE_TYPES,
            manual_score__isnull=True,
        ).exists()
        if pending:
            return False

        self.finalize_locked(submission)
        return True

    def finalize_locked(self, submission: Submission) -> Submission:
        """
        total 계산 + completed 전이 (호출자가 lock 보유)
        """
        ResultAggregator.apply(submission)

        submission.status = Submission.Status.COMPLETED
        submission.save(update_fields=["status", "updated_at"])

        logger.info(
            "SUBMISSION completed submission_id=%s total_score=%s",
            submission.id,
            submission.total_score,
        )
        return submission

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------
    def question_for(self, submission: Submission, question_id: int) -> QuestionSnapshot:
        question = submission.snapshot_question(question_id)
        if question is not None:
            return question

        # catalog 에 있으면 "세트 밖 문항", 없으면 NotFound 그대로 전파
        self.catalog.get_question(int(question_id))
        raise NotFound(
            f"Question {question_id} is not part of submission {submission.id}."
        )

    @staticmethod
    def _denormalized(submission: Submission, question: QuestionSnapshot) -> dict:
        return {
            "position": submission.snapshot_position(question.id),
            "question_type": question.type,
            "skill": question.skill,
            "max_points": int(question.points),
        }


def _provided(**values) -> dict:
    # 생략된 진행 정보는 기존 값 유지
    return {k: v for k, v in values.items() if v is not None}
