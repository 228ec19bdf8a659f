import pytest
from rest_framework.test import APIClient

from apps.core.models import User
from apps.domains.questions.models import Question, TestSet, TestSetQuestion


@pytest.fixture
def student(db):
    return User.objects.create_user(username="student", password="pw", role=User.Role.STUDENT)


@pytest.fixture
def other_student(db):
    return User.objects.create_user(username="student2", password="pw", role=User.Role.STUDENT)


@pytest.fixture
def grader(db):
    return User.objects.create_user(username="grader", password="pw", role=User.Role.ADMIN)


@pytest.fixture
def make_question(db):
    def _make(**kwargs):
        defaults = {
            "title": "Q",
            "skill": Question.Skill.READING,
            "type": Question.Type.MCQ_SINGLE,
            "points": 1,
            "content": "content",
            "options": ["A", "B", "C", "D"],
            "correct_answers": ["A"],
        }
        defaults.update(kwargs)
        return Question.objects.create(**defaults)

    return _make


@pytest.fixture
def make_test_set(db):
    def _make(questions, *, points=None, title="Set"):
        test_set = TestSet.objects.create(title=title, skill="Mixed")
        for order, q in enumerate(questions, start=1):
            TestSetQuestion.objects.create(
                test_set=test_set,
                question=q,
                order=order,
                points=(points or {}).get(q.id),
            )
        return test_set

    return _make


@pytest.fixture
def two_mcq_set(make_question, make_test_set):
    """정답 A, B 인 1점짜리 mcq_single 2문항"""
    q1 = make_question(title="Q1", correct_answers=["A"])
    q2 = make_question(title="Q2", correct_answers=["B"])
    return make_test_set([q1, q2]), q1, q2


@pytest.fixture
def mixed_set(make_question, make_test_set):
    """mcq_single 1점(A) + writing_prompt 5점"""
    mcq = make_question(title="MCQ", correct_answers=["A"])
    essay = make_question(
        title="Essay",
        skill=Question.Skill.WRITING,
        type=Question.Type.WRITING_PROMPT,
        points=5,
        options=[],
        correct_answers=[],
    )
    return make_test_set([mcq, essay]), mcq, essay


@pytest.fixture
def api_client():
    return APIClient()
