import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("jobs", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Candidate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cv_url", models.URLField(blank=True)),
                ("bio", models.TextField(blank=True)),
                ("skills", models.JSONField(blank=True, default=list)),
                ("experience", models.TextField(blank=True)),
                ("education", models.TextField(blank=True)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("availability", models.CharField(blank=True, max_length=100)),
                ("expected_salary", models.CharField(blank=True, max_length=100)),
                ("is_profile_complete", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE, related_name="candidate",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Application",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(
                    choices=[("APPLIED", "Applied"), ("REVIEWING", "Reviewing"), ("APPROVED", "Approved"),
                             ("REJECTED", "Rejected"), ("INTERVIEW_SCHEDULED", "Interview Scheduled"),
                             ("INTERVIEW_COMPLETED", "Interview Completed"), ("OFFERED", "Offered"),
                             ("ACCEPTED", "Accepted"), ("DECLINED", "Declined")],
                    default="APPLIED",
                    max_length=30,
                )),
                ("cover_letter", models.TextField(blank=True)),
                ("applied_at", models.DateTimeField(auto_now_add=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("interview_scheduled", models.BooleanField(default=False)),
                ("interview_date", models.DateTimeField(blank=True, null=True)),
                ("interview_location", models.CharField(blank=True, max_length=200)),
                ("interview_notes", models.TextField(blank=True)),
                ("rejection_reason", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("candidate", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="applications",
                    to="candidates.candidate",
                )),
                ("job", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="applications", to="jobs.job",
                )),
            ],
            options={
                "ordering": ["-applied_at"],
                "unique_together": {("job", "candidate")},
            },
        ),
    ]
