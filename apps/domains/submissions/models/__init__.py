# apps/domains/submissions/models/__init__.py

from .submission import Submission
from .submission_answer import SubmissionAnswer

__all__ = [
    "Submission",
    "SubmissionAnswer",
]
