# PATH: apps/domains/results/urls.py

from django.urls import path

from apps.domains.results.views.admin_grading_view import (
    ForceCompleteView,
    GradingQueueView,
    ManualGradeView,
    SubmissionReviewView,
)
from apps.domains.results.views.my_results_view import MyTestResultListView


urlpatterns = [
    # ============================
    # Student
    # ============================
    path("results/me/", MyTestResultListView.as_view(), name="my-test-results"),

    # ============================
    # Admin / Grader
    # ============================
    path("admin/submissions/", GradingQueueView.as_view(), name="grading-queue"),
    path(
        "admin/submissions/<int:submission_id>/answers/",
        SubmissionReviewView.as_view(),
        name="grading-review",
    ),
    path(
        "admin/submissions/<int:submission_id>/complete/",
        ForceCompleteView.as_view(),
        name="grading-force-complete",
    ),
    path("admin/grade/", ManualGradeView.as_view(), name="grading-grade"),
]
