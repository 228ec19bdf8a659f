# apps/domains/results/services/grading_service.py
"""
Grading Session (채점자 워크플로우)

- list_pending_queue    : 주관식 미채점 문항이 남은 submitted 목록
- get_answers_for_review: 한 submission 의 문항/답안/점수 (snapshot 순서)
- grade                 : 주관식 1문항 수동 점수 기록 (+ 자동 완료 판정)
- complete              : 관리자 강제 완료 (미채점 주관식은 0점 취급)

상태 변경은 전부 submission_lock 구간 안에서 수행.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from django.db.models import Count, Exists, OuterRef, Q
from django.utils import timezone

from apps.domains.results.services.applier import ResultAggregator
from apps.domains.submissions.exceptions import (
    InvalidQuestionType,
    NotFound,
    OutOfRange,
    SubmissionBusy,
    SubmissionClosed,
)
from apps.domains.submissions.locks import submission_lock
from apps.domains.submissions.models import Submission, SubmissionAnswer
from apps.domains.submissions.services.submission_service import SubmissionService
from src.application.ports.question_catalog import (
    SKILL_TO_SUBJECTIVE_TYPE,
    SUBJECTIVE_TYPES,
    IQuestionCatalog,
)

logger = logging.getLogger(__name__)


def subjective_types_for_skill(skill: Optional[str]) -> tuple:
    """
    skill 필터 → 주관식 유형
    - 없음/빈값 → 전체 주관식
    - writing / speaking (대소문자 무시) → 해당 유형
    - 그 외 → 빈 tuple (큐 비어 있음)
    """
    if skill is None or str(skill).strip() == "":
        return SUBJECTIVE_TYPES
    t = SKILL_TO_SUBJECTIVE_TYPE.get(str(skill).strip().lower())
    return (t,) if t else ()


def _coerce_score(value: Any) -> float:
    if isinstance(value, bool):
        raise OutOfRange("Score must be a number.")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise OutOfRange("Score must be a number.")
    if not math.isfinite(score):
        raise OutOfRange("Score must be a finite number.")
    return score


class GradingService:
    def __init__(self, catalog: Optional[IQuestionCatalog] = None):
        self.submissions = SubmissionService(catalog=catalog)

    # ------------------------------------------------------------
    # queue
    # ------------------------------------------------------------
    def list_pending_queue(self, *, skill: Optional[str] = None) -> List[Dict[str, Any]]:
        self._heal_fully_graded()

        types = subjective_types_for_skill(skill)
        if not types:
            return []

        pending = SubmissionAnswer.objects.filter(
            submission=OuterRef("pk"),
            question_type__in=types,
            manual_score__isnull=True,
        )

        qs = (
            Submission.objects
            .filter(status=Submission.Status.SUBMITTED)
            .filter(Exists(pending))
            .annotate(
                subjective_items=Count(
                    "answers",
                    filter=Q(answers__question_type__in=types),
                ),
                pending_items=Count(
                    "answers",
                    filter=Q(
                        answers__question_type__in=types,
                        answers__manual_score__isnull=True,
                    ),
                ),
            )
            .order_by("-submit_time", "-id")
        )

        return [
            {
                "submission_id": s.id,
                "user_id": s.user_id,
                "set_id": s.set_id,
                "attempt": s.attempt,
                "status": s.status,
                "submit_time": s.submit_time,
                "duration_sec": s.duration_sec,
                "subjective_items": s.subjective_items,
                "pending_items": s.pending_items,
            }
            for s in qs
        ]

    def _heal_fully_graded(self) -> None:
        """
        채점 중 누락된 완료 전이 복구 (idempotent)
        미채점 주관식이 남은 행은 lock 대상에서 제외
        """
        ungraded = SubmissionAnswer.objects.filter(
            submission=OuterRef("pk"),
            question_type__in=SUBJECTIVE_TYPES,
            manual_score__isnull=True,
        )
        stale_ids = list(
            Submission.objects
            .filter(status=Submission.Status.SUBMITTED)
            .filter(~Exists(ungraded))
            .values_list("id", flat=True)
        )
        for submission_id in stale_ids:
            try:
                self.submissions.complete_if_fully_graded(submission_id=submission_id)
            except SubmissionBusy:
                # 채점 중인 행: grade 쪽 완료 판정이 처리
                logger.info("QUEUE heal skipped busy submission_id=%s", submission_id)

    # ------------------------------------------------------------
    # review
    # ------------------------------------------------------------
    def get_answers_for_review(self, *, submission_id: int) -> Dict[str, Any]:
        submission = Submission.objects.filter(id=int(submission_id)).first()
        if submission is None:
            raise NotFound(f"Submission {submission_id} not found.")

        answers = {a.question_id: a for a in submission.answers.select_related("graded_by")}

        items = []
        for position, q in enumerate(submission.questions):
            a = answers.get(q.id)
            items.append({
                "position": position,
                "question_id": q.id,
                "title": q.title,
                "skill": q.skill,
                "type": q.type,
                "points": q.points,
                "content": q.content,
                "options": q.options,
                "correct_answers": q.correct_answers if q.is_objective else [],
                "media_url": q.media_url,
                "explanation": q.explanation,
                "answer_data": a.answer_data if a else None,
                "time_spent_sec": a.time_spent_sec if a else None,
                "attempts": a.attempts if a else None,
                "auto_score": a.auto_score if a else None,
                "manual_score": a.manual_score if a else None,
                "current_score": a.current_score if a else None,
                "is_correct": a.is_correct if a else None,
                "comment": a.comment if a else "",
                "rubric_id": a.rubric_id if a else "",
                "scores": a.scores if a else None,
                "graded_by": a.graded_by_id if a else None,
                "graded_at": a.graded_at if a else None,
            })

        return {
            "submission_id": submission.id,
            "user_id": submission.user_id,
            "set_id": submission.set_id,
            "attempt": submission.attempt,
            "status": submission.status,
            "submit_time": submission.submit_time,
            "duration_sec": submission.duration_sec,
            "total_score": submission.total_score,
            "items": items,
        }

    # ------------------------------------------------------------
    # grade
    # ------------------------------------------------------------
    def grade(
        self,
        *,
        submission_id: int,
        question_id: int,
        manual_score: Any,
        comment: str = "",
        grader=None,
        rubric_id: Any = None,
        scores: Any = None,
    ) -> SubmissionAnswer:
        with submission_lock(submission_id) as submission:
            question = self.submissions.question_for(submission, question_id)

            if not question.is_subjective:
                raise InvalidQuestionType(
                    f"Question {question.id} ({question.type}) is auto-scored."
                )

            score = _coerce_score(manual_score)
            if score < 0 or score > float(question.points):
                raise OutOfRange(
                    f"Score must be between 0 and {question.points}."
                )

            if submission.status == Submission.Status.IN_PROGRESS:
                raise SubmissionClosed("Submission has not been submitted yet.")

            answer, _ = SubmissionAnswer.objects.get_or_create(
                submission=submission,
                question_id=question.id,
                defaults={
                    "position": submission.snapshot_position(question.id),
                    "question_type": question.type,
                    "skill": question.skill,
                    "max_points": int(question.points),
                },
            )
            answer.manual_score = score
            answer.comment = comment or ""
            answer.rubric_id = "" if rubric_id is None else str(rubric_id)
            answer.scores = scores
            answer.graded_by = grader if getattr(grader, "pk", None) else None
            answer.graded_at = timezone.now()
            answer.save(update_fields=[
                "manual_score", "comment", "rubric_id", "scores",
                "graded_by", "graded_at", "updated_at",
            ])

            logger.info(
                "GRADE submission_id=%s question_id=%s score=%s grader_id=%s",
                submission.id,
                question.id,
                score,
                getattr(grader, "pk", None),
            )

            if submission.status == Submission.Status.COMPLETED:
                # 재채점: 총점만 다시 계산
                ResultAggregator.apply(submission)
            else:
                self.submissions.complete_if_fully_graded_locked(submission)

            return answer

    # ------------------------------------------------------------
    # force complete
    # ------------------------------------------------------------
    def complete(self, *, submission_id: int) -> Submission:
        with submission_lock(submission_id) as submission:
            if submission.status != Submission.Status.SUBMITTED:
                raise SubmissionClosed(
                    f"Submission is {submission.status}, expected submitted."
                )
            return self.submissions.finalize_locked(submission)
