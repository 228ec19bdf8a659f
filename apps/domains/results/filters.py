# PATH: apps/domains/results/filters.py
import django_filters

from apps.domains.results.models import TestResult


class TestResultFilter(django_filters.FilterSet):
    """
    /results/me/ 필터
    ?set_id=3&completed_after=2024-01-01T00:00:00Z
    """

    __test__ = False

    set_id = django_filters.NumberFilter(field_name="set_id")
    completed_after = django_filters.IsoDateTimeFilter(field_name="completed_at", lookup_expr="gte")
    completed_before = django_filters.IsoDateTimeFilter(field_name="completed_at", lookup_expr="lte")

    class Meta:
        model = TestResult
        fields = ["set_id"]
