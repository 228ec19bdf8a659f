# apps/domains/results/services/grader.py
"""
Scorer: 객관식 문항 1개 자동 채점 (순수 함수, DB 접근 없음)

- mcq_single  : 정답 선택지 1개와 일치
- mcq_multi   : 선택 집합 == 정답 집합 (부분 점수 없음)
- fill_blank  : 빈칸별 허용 답안 중 하나와 일치 (모든 빈칸 정답일 때만 만점)

비교 규칙: 앞뒤 공백 제거 + 대소문자 무시
빈 답안 → 0점 / 오답 (예외 아님)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from apps.domains.submissions.exceptions import InvalidQuestionType, MalformedAnswer
from src.application.ports.question_catalog import (
    FILL_BLANK,
    MCQ_MULTI,
    MCQ_SINGLE,
    OBJECTIVE_TYPES,
    QuestionSnapshot,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    auto_score: float
    is_correct: bool


ZERO = ScoreResult(auto_score=0.0, is_correct=False)


def _norm(value: Any) -> str:
    # 1.0 과 "1" 은 같은 답
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().casefold()


def _is_scalar(value: Any) -> bool:
    # bool 은 int 의 subclass 라서 먼저 배제
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float))


def _is_empty(answer_data: Any) -> bool:
    if answer_data is None:
        return True
    if isinstance(answer_data, str):
        return answer_data.strip() == ""
    if isinstance(answer_data, (list, tuple, set, dict)):
        return len(answer_data) == 0
    return False


def _scalar_list(answer_data: Any, *, question_id: int) -> List[str]:
    if not isinstance(answer_data, (list, tuple, set)):
        raise MalformedAnswer(f"Question {question_id}: expected a list of option ids.")
    out: List[str] = []
    for v in answer_data:
        if not _is_scalar(v):
            raise MalformedAnswer(f"Question {question_id}: option ids must be strings or numbers.")
        out.append(_norm(v))
    return out


def _warn_missing_key(question: QuestionSnapshot) -> None:
    logger.warning(
        "SCORER answer key missing question_id=%s type=%s",
        question.id,
        question.type,
    )


# ------------------------------------------------------------
# type 별 판정
# ------------------------------------------------------------

def _grade_mcq_single(question: QuestionSnapshot, answer_data: Any) -> bool:
    if isinstance(answer_data, (list, tuple)) and len(answer_data) == 1:
        answer_data = answer_data[0]
    if not _is_scalar(answer_data):
        raise MalformedAnswer(f"Question {question.id}: expected a single option id.")

    keys = [k for k in (question.correct_answers or []) if _is_scalar(k)]
    if not keys:
        _warn_missing_key(question)
        return False

    ans = _norm(answer_data)
    return ans != "" and ans == _norm(keys[0])


def _grade_mcq_multi(question: QuestionSnapshot, answer_data: Any) -> bool:
    chosen = {v for v in _scalar_list(answer_data, question_id=question.id) if v != ""}

    keys = {_norm(k) for k in (question.correct_answers or []) if _is_scalar(k)}
    keys.discard("")
    if not keys:
        _warn_missing_key(question)
        return False

    return chosen == keys


def _blank_variants(correct_answers: List[Any]) -> List[set]:
    """
    correct_answers 형태
      ["cat", "Cat"]                 → 빈칸 1개, 허용 답안 2개
      [["goes"], ["to", "toward"]]   → 빈칸 2개
    """
    if any(isinstance(k, (list, tuple)) for k in correct_answers):
        blanks = []
        for k in correct_answers:
            variants = k if isinstance(k, (list, tuple)) else [k]
            blanks.append({_norm(v) for v in variants if _is_scalar(v)} - {""})
        return blanks

    variants = {_norm(v) for v in correct_answers if _is_scalar(v)} - {""}
    return [variants] if variants else []


def _grade_fill_blank(question: QuestionSnapshot, answer_data: Any) -> bool:
    if _is_scalar(answer_data):
        answers = [answer_data]
    elif isinstance(answer_data, (list, tuple)):
        answers = list(answer_data)
    else:
        raise MalformedAnswer(f"Question {question.id}: expected text or a list of texts.")

    normalized: List[str] = []
    for a in answers:
        if a is None:
            normalized.append("")
        elif _is_scalar(a):
            normalized.append(_norm(a))
        else:
            raise MalformedAnswer(f"Question {question.id}: blank answers must be text.")

    blanks = _blank_variants(list(question.correct_answers or []))
    if not blanks or any(not variants for variants in blanks):
        _warn_missing_key(question)
        return False

    if len(normalized) != len(blanks):
        return False

    return all(ans != "" and ans in variants for ans, variants in zip(normalized, blanks))


_GRADERS = {
    MCQ_SINGLE: _grade_mcq_single,
    MCQ_MULTI: _grade_mcq_multi,
    FILL_BLANK: _grade_fill_blank,
}


# ------------------------------------------------------------
# public
# ------------------------------------------------------------

def score(question: QuestionSnapshot, answer_data: Any) -> ScoreResult:
    """
    객관식 1문항 채점.
    - 주관식 type → InvalidQuestionType
    - 형태가 맞지 않는 answer_data → MalformedAnswer
    """
    if question.type not in OBJECTIVE_TYPES:
        raise InvalidQuestionType(
            f"Question {question.id} ({question.type}) is not auto-scorable."
        )

    if _is_empty(answer_data):
        return ZERO

    is_correct = _GRADERS[question.type](question, answer_data)
    points = float(question.points or 0)
    return ScoreResult(auto_score=points if is_correct else 0.0, is_correct=is_correct)


def score_or_zero(question: QuestionSnapshot, answer_data: Any, *, submission_id: Optional[int] = None) -> ScoreResult:
    """
    submit 경로 전용: 형태 오류 답안은 0점 처리 후 WARNING 로그
    """
    try:
        return score(question, answer_data)
    except MalformedAnswer as e:
        logger.warning(
            "SCORER malformed answer submission_id=%s question_id=%s reason=%s",
            submission_id,
            question.id,
            e.message,
        )
        return ZERO
