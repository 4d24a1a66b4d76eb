import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SystemSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("site_name", models.CharField(default="JobPortal Admin", max_length=100)),
                ("contact_email", models.EmailField(default="support@jobportal.example", max_length=254)),
                ("pusher_app_id", models.CharField(blank=True, max_length=100)),
                ("pusher_key", models.CharField(blank=True, max_length=100)),
                ("encrypted_pusher_secret", models.TextField(blank=True, help_text="Encrypted Pusher secret")),
                ("pusher_cluster", models.CharField(blank=True, default="mt1", max_length=20)),
                ("push_timeout_seconds", models.PositiveIntegerField(
                    blank=True, null=True, help_text="Overrides PUSHER_TIMEOUT_SECONDS when set",
                )),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="AdminLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(
                    choices=[
                        ("EMPLOYER_APPROVED", "Employer Approved"),
                        ("EMPLOYER_REJECTED", "Employer Rejected"),
                        ("EMPLOYER_SUSPENDED", "Employer Suspended"),
                        ("EMPLOYER_UNSUSPENDED", "Employer Unsuspended"),
                        ("JOB_APPROVED", "Job Approved"),
                        ("JOB_REJECTED", "Job Rejected"),
                        ("JOB_SUSPENDED", "Job Suspended"),
                        ("ANNOUNCEMENT_PUBLISHED", "Announcement Published"),
                        ("SUPPORT_RESPONDED", "Support Responded"),
                        ("ESCALATION_RESPONDED", "Escalation Responded"),
                        ("SETTINGS_UPDATED", "Settings Updated"),
                    ],
                    max_length=50,
                )),
                ("entity_type", models.CharField(blank=True, max_length=50)),
                ("entity_id", models.CharField(blank=True, max_length=100)),
                ("description", models.TextField(blank=True)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("admin", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="admin_logs",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["entity_type", "entity_id"], name="adminlog_entity_idx")],
            },
        ),
    ]
