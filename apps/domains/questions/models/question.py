from django.db import models

from apps.api.common.models import BaseModel


class Question(BaseModel):
    """
    문제 은행 문항 정의

    - 채점 엔진은 이 행을 직접 읽지 않는다 (QuestionCatalog 포트 경유)
    - 응시 시작 시점에 snapshot 으로 고정되므로 이후 수정은 진행/완료된 응시에 영향 없음
    """

    class Skill(models.TextChoices):
        READING = "Reading", "Reading"
        LISTENING = "Listening", "Listening"
        SPEAKING = "Speaking", "Speaking"
        WRITING = "Writing", "Writing"
        GRAMMAR_VOCABULARY = "GrammarVocabulary", "Grammar & Vocabulary"

    class Type(models.TextChoices):
        MCQ_SINGLE = "mcq_single", "Multiple choice (single)"
        MCQ_MULTI = "mcq_multi", "Multiple choice (multi)"
        FILL_BLANK = "fill_blank", "Fill in the blank"
        WRITING_PROMPT = "writing_prompt", "Writing prompt"
        SPEAKING_PROMPT = "speaking_prompt", "Speaking prompt"

    title = models.CharField(max_length=255, blank=True)
    skill = models.CharField(max_length=30, choices=Skill.choices)
    type = models.CharField(max_length=30, choices=Type.choices)

    points = models.PositiveIntegerField(default=1)
    tags = models.JSONField(default=list, blank=True)

    content = models.TextField()

    # mcq: 선택지 목록 (순서 유지)
    options = models.JSONField(default=list, blank=True)

    # mcq_single: [정답]
    # mcq_multi: [정답, ...] (집합으로 비교)
    # fill_blank: ["허용답", ...] 또는 빈칸별 [["허용답", ...], ...]
    correct_answers = models.JSONField(default=list, blank=True)

    media_url = models.URLField(max_length=500, blank=True, null=True)
    explanation = models.TextField(blank=True)

    class Meta:
        db_table = "questions_question"
        indexes = [
            models.Index(fields=["skill", "type"], name="questions_skill_type_idx"),
        ]
        ordering = ["id"]

    def __str__(self):
        return f"Q{self.id} [{self.skill}/{self.type}] {self.title}"
