from django.contrib import admin

from apps.domains.questions.models import Question, TestSet, TestSetQuestion


class TestSetQuestionInline(admin.TabularInline):
    model = TestSetQuestion
    extra = 0
    raw_id_fields = ("question",)


@admin.register(TestSet)
class TestSetAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "skill", "status", "difficulty")
    list_filter = ("status", "skill")
    search_fields = ("title",)
    inlines = [TestSetQuestionInline]


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "skill", "type", "points")
    list_filter = ("skill", "type")
    search_fields = ("title", "content")
