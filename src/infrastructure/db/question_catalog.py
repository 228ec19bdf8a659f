"""
DjangoQuestionCatalog - IQuestionCatalog 구현체

Django ORM으로 questions 앱을 읽기만 한다.
엔진(submissions/results)은 모델을 직접 부르지 않고 get_question_catalog() 만 사용.
"""
from __future__ import annotations

import logging

from apps.domains.questions.models import Question, TestSet, TestSetQuestion
from apps.domains.submissions.exceptions import NotFound
from src.application.ports.question_catalog import IQuestionCatalog, QuestionSnapshot

logger = logging.getLogger(__name__)


def _to_snapshot(question: Question, points: int | None = None) -> QuestionSnapshot:
    return QuestionSnapshot(
        id=int(question.id),
        skill=str(question.skill),
        type=str(question.type),
        points=int(points or question.points or 1),
        title=question.title or "",
        content=question.content or "",
        options=list(question.options or []),
        correct_answers=list(question.correct_answers or []),
        media_url=question.media_url or None,
        explanation=question.explanation or "",
    )


class DjangoQuestionCatalog(IQuestionCatalog):
    """IQuestionCatalog 구현 (Django ORM)"""

    def get_questions_for_set(self, set_id: int) -> list[QuestionSnapshot]:
        if not TestSet.objects.filter(id=int(set_id)).exists():
            raise NotFound(f"Test set {set_id} not found.")

        items = (
            TestSetQuestion.objects
            .select_related("question")
            .filter(test_set_id=int(set_id))
            .order_by("order", "id")
        )
        return [_to_snapshot(item.question, item.effective_points) for item in items]

    def get_question(self, question_id: int) -> QuestionSnapshot:
        question = Question.objects.filter(id=int(question_id)).first()
        if not question:
            raise NotFound(f"Question {question_id} not found.")
        return _to_snapshot(question)


_default_catalog: IQuestionCatalog | None = None


def get_question_catalog() -> IQuestionCatalog:
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = DjangoQuestionCatalog()
    return _default_catalog
