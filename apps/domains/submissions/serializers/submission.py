# apps/domains/submissions/serializers/submission.py
from rest_framework import serializers

from apps.domains.submissions.models import Submission, SubmissionAnswer


class SubmissionAnswerSerializer(serializers.ModelSerializer):
    current_score = serializers.FloatField(read_only=True, allow_null=True)

    class Meta:
        model = SubmissionAnswer
        fields = (
            "question_id",
            "position",
            "question_type",
            "skill",
            "max_points",
            "answer_data",
            "time_spent_sec",
            "attempts",
            "auto_score",
            "manual_score",
            "current_score",
            "is_correct",
            "comment",
            "rubric_id",
            "scores",
            "graded_at",
        )
        read_only_fields = fields


class SubmissionSerializer(serializers.ModelSerializer):
    question_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Submission
        fields = (
            "id",
            "user",
            "set_id",
            "attempt",
            "status",
            "started_at",
            "submit_time",
            "duration_sec",
            "total_score",
            "question_count",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class SubmissionDetailSerializer(SubmissionSerializer):
    """
    응시 화면용: snapshot 문항 (정답 제외) + 기록된 답안
    """
    questions = serializers.SerializerMethodField()
    answers = SubmissionAnswerSerializer(many=True, read_only=True)

    class Meta(SubmissionSerializer.Meta):
        fields = SubmissionSerializer.Meta.fields + ("questions", "answers")
        read_only_fields = fields

    def get_questions(self, obj):
        # 응시 중 정답/해설 노출 금지, 완료 후에는 해설까지 공개
        reveal = obj.status == Submission.Status.COMPLETED
        out = []
        for q in obj.questions:
            row = {
                "id": q.id,
                "skill": q.skill,
                "type": q.type,
                "points": q.points,
                "title": q.title,
                "content": q.content,
                "options": q.options,
                "media_url": q.media_url,
            }
            if reveal:
                row["correct_answers"] = q.correct_answers
                row["explanation"] = q.explanation
            out.append(row)
        return out


class SubmissionStartSerializer(serializers.Serializer):
    set_id = serializers.IntegerField(min_value=1)
    # 관리자만 다른 사용자 대신 시작 가능
    user_id = serializers.IntegerField(min_value=1, required=False)


class AnswerRecordSerializer(serializers.Serializer):
    answer_data = serializers.JSONField(allow_null=True)
    time_spent_sec = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    attempts = serializers.IntegerField(min_value=0, required=False, allow_null=True)
