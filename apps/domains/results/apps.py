from django.apps import AppConfig


class ResultsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"

    name = "apps.domains.results"

    # migration / FK / 참조용 앱 라벨 (절대 변경 금지)
    label = "results"
