# PATH: apps/domains/questions/models/__init__.py

from .question import Question
from .test_set import TestSet, TestSetQuestion

__all__ = [
    "Question",
    "TestSet",
    "TestSetQuestion",
]
