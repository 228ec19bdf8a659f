from django.contrib import admin

from apps.domains.submissions.models import Submission, SubmissionAnswer


class SubmissionAnswerInline(admin.TabularInline):
    model = SubmissionAnswer
    extra = 0
    fields = (
        "position",
        "question_id",
        "question_type",
        "answer_data",
        "time_spent_sec",
        "auto_score",
        "manual_score",
        "rubric_id",
        "is_correct",
        "graded_by",
        "graded_at",
    )
    readonly_fields = fields
    can_delete = False


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "set_id", "attempt", "status", "submit_time", "total_score")
    list_filter = ("status",)
    search_fields = ("user__username",)
    readonly_fields = ("question_snapshot", "total_score", "submit_time", "duration_sec")
    inlines = [SubmissionAnswerInline]
