"""
Question Catalog Port (인터페이스)

채점 엔진이 문제 은행을 읽는 유일한 통로. 엔진은 문항을 절대 수정하지 않는다.
구현체: src.infrastructure.db.question_catalog.DjangoQuestionCatalog
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


# apps.domains.questions.models.Question.Type choices와 동기화
MCQ_SINGLE = "mcq_single"
MCQ_MULTI = "mcq_multi"
FILL_BLANK = "fill_blank"
WRITING_PROMPT = "writing_prompt"
SPEAKING_PROMPT = "speaking_prompt"

OBJECTIVE_TYPES = (MCQ_SINGLE, MCQ_MULTI, FILL_BLANK)
SUBJECTIVE_TYPES = (WRITING_PROMPT, SPEAKING_PROMPT)

# 채점 큐 skill 필터 → 주관식 유형
SKILL_TO_SUBJECTIVE_TYPE = {
    "writing": WRITING_PROMPT,
    "speaking": SPEAKING_PROMPT,
}


def is_objective(question_type: str) -> bool:
    return question_type in OBJECTIVE_TYPES


def is_subjective(question_type: str) -> bool:
    return question_type in SUBJECTIVE_TYPES


@dataclass(frozen=True)
class QuestionSnapshot:
    """
    응시 시점에 고정되는 문항 사본.
    points 는 세트별 배점이 반영된 값.
    """
    id: int
    skill: str
    type: str
    points: int = 1
    title: str = ""
    content: str = ""
    options: list[str] = field(default_factory=list)
    correct_answers: list[Any] = field(default_factory=list)
    media_url: Optional[str] = None
    explanation: str = ""

    @property
    def is_objective(self) -> bool:
        return is_objective(self.type)

    @property
    def is_subjective(self) -> bool:
        return is_subjective(self.type)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionSnapshot":
        return cls(
            id=int(data["id"]),
            skill=str(data.get("skill") or ""),
            type=str(data.get("type") or ""),
            points=int(data.get("points") or 1),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            options=list(data.get("options") or []),
            correct_answers=list(data.get("correct_answers") or []),
            media_url=data.get("media_url") or None,
            explanation=str(data.get("explanation") or ""),
        )


class IQuestionCatalog(ABC):
    """Question Catalog 추상 인터페이스 (read-only)"""

    @abstractmethod
    def get_questions_for_set(self, set_id: int) -> list[QuestionSnapshot]:
        """
        세트 구성 순서대로 문항 반환.
        세트가 없으면 NotFound.
        """
        pass

    @abstractmethod
    def get_question(self, question_id: int) -> QuestionSnapshot:
        """문항 단건. 없으면 NotFound."""
        pass
