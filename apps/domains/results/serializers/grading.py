# apps/domains/results/serializers/grading.py
from rest_framework import serializers


class GradingQueueQuerySerializer(serializers.Serializer):
    # 큐는 submitted 만 대상
    status = serializers.ChoiceField(choices=["submitted"], required=False, default="submitted")
    skill = serializers.CharField(required=False, allow_blank=True, default="")


class GradingQueueRowSerializer(serializers.Serializer):
    submission_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    set_id = serializers.IntegerField()
    attempt = serializers.IntegerField()
    status = serializers.CharField()
    submit_time = serializers.DateTimeField(allow_null=True)
    duration_sec = serializers.IntegerField(allow_null=True)
    subjective_items = serializers.IntegerField()
    pending_items = serializers.IntegerField()


class ReviewItemSerializer(serializers.Serializer):
    position = serializers.IntegerField()
    question_id = serializers.IntegerField()
    title = serializers.CharField(allow_blank=True)
    skill = serializers.CharField(allow_blank=True)
    type = serializers.CharField()
    points = serializers.IntegerField()
    content = serializers.CharField(allow_blank=True)
    options = serializers.JSONField()
    correct_answers = serializers.JSONField()
    media_url = serializers.CharField(allow_null=True)
    explanation = serializers.CharField(allow_blank=True)
    answer_data = serializers.JSONField(allow_null=True)
    time_spent_sec = serializers.IntegerField(allow_null=True)
    attempts = serializers.IntegerField(allow_null=True)
    auto_score = serializers.FloatField(allow_null=True)
    manual_score = serializers.FloatField(allow_null=True)
    current_score = serializers.FloatField(allow_null=True)
    is_correct = serializers.BooleanField(allow_null=True)
    comment = serializers.CharField(allow_blank=True)
    rubric_id = serializers.CharField(allow_blank=True)
    scores = serializers.JSONField(allow_null=True)
    graded_by = serializers.IntegerField(allow_null=True)
    graded_at = serializers.DateTimeField(allow_null=True)


class ReviewSerializer(serializers.Serializer):
    submission_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    set_id = serializers.IntegerField()
    attempt = serializers.IntegerField()
    status = serializers.CharField()
    submit_time = serializers.DateTimeField(allow_null=True)
    duration_sec = serializers.IntegerField(allow_null=True)
    total_score = serializers.FloatField(allow_null=True)
    items = ReviewItemSerializer(many=True)


class ManualGradeSerializer(serializers.Serializer):
    submission_id = serializers.IntegerField(min_value=1)
    question_id = serializers.IntegerField(min_value=1)
    # 범위 검증은 서비스(OutOfRange) 책임
    manual_score = serializers.FloatField()
    comment = serializers.CharField(required=False, allow_blank=True, default="")
    # 루브릭 채점 (선택): rubric_id 는 문자열/숫자 모두 허용
    rubric_id = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=64)
    scores = serializers.JSONField(required=False, allow_null=True)
