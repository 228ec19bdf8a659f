from .submission_view import SubmissionViewSet

__all__ = ["SubmissionViewSet"]
