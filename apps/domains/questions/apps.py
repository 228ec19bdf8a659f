from django.apps import AppConfig


class QuestionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"

    name = "apps.domains.questions"

    # migration / FK 참조용 앱 라벨
    label = "questions"
