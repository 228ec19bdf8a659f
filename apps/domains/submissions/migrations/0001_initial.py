import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("set_id", models.PositiveBigIntegerField()),
                ("attempt", models.PositiveIntegerField(default=1)),
                ("status", models.CharField(choices=[("in_progress", "In progress"), ("submitted", "Submitted"), ("completed", "Completed")], default="in_progress", max_length=20)),
                ("question_snapshot", models.JSONField(blank=True, default=list)),
                ("started_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("submit_time", models.DateTimeField(blank=True, null=True)),
                ("duration_sec", models.PositiveIntegerField(blank=True, null=True)),
                ("total_score", models.FloatField(blank=True, null=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submissions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "submissions_submission",
                "ordering": ["-id"],
                "indexes": [
                    models.Index(fields=["user", "set_id"], name="submissions_user_set_idx"),
                    models.Index(fields=["status", "submit_time"], name="submissions_status_time_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("status", "in_progress")), fields=("user", "set_id"), name="uniq_submission_in_progress_per_set"),
                    models.UniqueConstraint(fields=("user", "set_id", "attempt"), name="uniq_submission_attempt"),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("status", "in_progress"), ("submit_time__isnull", True)),
                            models.Q(models.Q(("status", "in_progress"), _negated=True), ("submit_time__isnull", False)),
                            _connector="OR",
                        ),
                        name="submission_submit_time_matches_status",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SubmissionAnswer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question_id", models.PositiveBigIntegerField()),
                ("position", models.PositiveIntegerField(default=0)),
                ("question_type", models.CharField(max_length=30)),
                ("skill", models.CharField(blank=True, max_length=30)),
                ("max_points", models.PositiveIntegerField(default=1)),
                ("answer_data", models.JSONField(blank=True, null=True)),
                ("auto_score", models.FloatField(blank=True, null=True)),
                ("manual_score", models.FloatField(blank=True, null=True)),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                ("comment", models.TextField(blank=True)),
                ("graded_at", models.DateTimeField(blank=True, null=True)),
                ("graded_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="graded_answers", to=settings.AUTH_USER_MODEL)),
                ("submission", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="answers", to="submissions.submission")),
            ],
            options={
                "db_table": "submissions_answer",
                "ordering": ["position", "id"],
                "indexes": [
                    models.Index(fields=["submission", "question_type"], name="submissions_answer_type_idx"),
                ],
                "unique_together": {("submission", "question_id")},
            },
        ),
    ]
