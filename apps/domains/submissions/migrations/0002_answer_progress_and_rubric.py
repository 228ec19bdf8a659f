from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("submissions", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="submissionanswer",
            name="time_spent_sec",
            field=models.PositiveIntegerField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name="submissionanswer",
            name="attempts",
            field=models.PositiveIntegerField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name="submissionanswer",
            name="rubric_id",
            field=models.CharField(blank=True, max_length=64),
        ),
        migrations.AddField(
            model_name="submissionanswer",
            name="scores",
            field=models.JSONField(blank=True, null=True),
        ),
    ]
