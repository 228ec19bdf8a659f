from django.contrib import admin

from apps.domains.results.models import TestResult


@admin.register(TestResult)
class TestResultAdmin(admin.ModelAdmin):
    list_display = ("id", "submission", "user", "set_id", "score", "max_score", "completed_at")
    list_filter = ("set_id",)
    search_fields = ("user__username",)
