import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("submissions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="TestResult",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("set_id", models.PositiveBigIntegerField()),
                ("score", models.FloatField(default=0.0)),
                ("max_score", models.FloatField(default=0.0)),
                ("total_questions", models.PositiveIntegerField(default=0)),
                ("correct_answers", models.PositiveIntegerField(default=0)),
                ("time_spent_sec", models.PositiveIntegerField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("submission", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="test_result", to="submissions.submission")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="test_results", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "results_test_result",
                "ordering": ["-completed_at", "-id"],
                "indexes": [
                    models.Index(fields=["user", "completed_at"], name="results_user_done_idx"),
                    models.Index(fields=["set_id", "score"], name="results_set_score_idx"),
                ],
            },
        ),
    ]
