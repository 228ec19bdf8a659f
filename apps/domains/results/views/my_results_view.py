# PATH: apps/domains/results/views/my_results_view.py
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated

from apps.domains.results.filters import TestResultFilter
from apps.domains.results.models import TestResult
from apps.domains.results.serializers.test_result import TestResultSerializer

MY_RESULTS_LIMIT = 50


class MyTestResultListView(ListAPIView):
    """
    GET /results/me/
    본인 결과 최신순 최대 50건
    """
    permission_classes = [IsAuthenticated]
    serializer_class = TestResultSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = TestResultFilter
    pagination_class = None

    def get_queryset(self):
        return (
            TestResult.objects
            .select_related("submission")
            .filter(user=self.request.user)
            .order_by("-completed_at", "-id")
        )

    def filter_queryset(self, queryset):
        return super().filter_queryset(queryset)[:MY_RESULTS_LIMIT]
