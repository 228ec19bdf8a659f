import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("skill", models.CharField(choices=[("Reading", "Reading"), ("Listening", "Listening"), ("Speaking", "Speaking"), ("Writing", "Writing"), ("GrammarVocabulary", "Grammar & Vocabulary")], max_length=30)),
                ("type", models.CharField(choices=[("mcq_single", "Multiple choice (single)"), ("mcq_multi", "Multiple choice (multi)"), ("fill_blank", "Fill in the blank"), ("writing_prompt", "Writing prompt"), ("speaking_prompt", "Speaking prompt")], max_length=30)),
                ("points", models.PositiveIntegerField(default=1)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("content", models.TextField()),
                ("options", models.JSONField(blank=True, default=list)),
                ("correct_answers", models.JSONField(blank=True, default=list)),
                ("media_url", models.URLField(blank=True, max_length=500, null=True)),
                ("explanation", models.TextField(blank=True)),
            ],
            options={
                "db_table": "questions_question",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["skill", "type"], name="questions_skill_type_idx")],
            },
        ),
        migrations.CreateModel(
            name="TestSet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("skill", models.CharField(max_length=30)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("published", "Published")], default="draft", max_length=20)),
                ("difficulty", models.CharField(default="medium", max_length=20)),
                ("time_limit", models.PositiveIntegerField(default=60, help_text="minutes")),
            ],
            options={
                "db_table": "questions_test_set",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TestSetQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order", models.PositiveIntegerField(default=1)),
                ("points", models.PositiveIntegerField(blank=True, null=True)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="set_items", to="questions.question")),
                ("test_set", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="questions.testset")),
            ],
            options={
                "db_table": "questions_test_set_question",
                "ordering": ["order", "id"],
                "unique_together": {("test_set", "question")},
            },
        ),
        migrations.AddField(
            model_name="testset",
            name="questions",
            field=models.ManyToManyField(related_name="test_sets", through="questions.TestSetQuestion", to="questions.question"),
        ),
    ]
