# apps/api/v1/urls.py
from django.urls import path, include

urlpatterns = [
    # =========================
    # Domain APIs
    # =========================
    # /submissions/ (router)
    path("", include("apps.domains.submissions.urls")),

    # /admin/... (채점자), /results/me/
    path("", include("apps.domains.results.urls")),

    # =========================
    # Core
    # =========================
    path("core/", include("apps.core.urls")),
]
