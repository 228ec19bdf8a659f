# apps/domains/results/serializers/test_result.py
from rest_framework import serializers

from apps.domains.results.models import TestResult


class TestResultSerializer(serializers.ModelSerializer):
    __test__ = False

    submission_id = serializers.IntegerField(read_only=True)
    attempt = serializers.IntegerField(source="submission.attempt", read_only=True)

    class Meta:
        model = TestResult
        fields = (
            "id",
            "submission_id",
            "set_id",
            "attempt",
            "score",
            "max_score",
            "total_questions",
            "correct_answers",
            "time_spent_sec",
            "completed_at",
        )
        read_only_fields = fields
