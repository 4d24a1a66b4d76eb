import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [("OPEN", "Open"), ("IN_PROGRESS", "In Progress"), ("RESOLVED", "Resolved"), ("CLOSED", "Closed")]
PRIORITY_CHOICES = [("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High"), ("URGENT", "Urgent")]


def ticket_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("subject", models.CharField(max_length=200)),
        ("message", models.TextField()),
        ("status", models.CharField(choices=STATUS_CHOICES, default="OPEN", max_length=20)),
        ("priority", models.CharField(choices=PRIORITY_CHOICES, default="MEDIUM", max_length=20)),
        ("admin_response", models.TextField(blank=True, null=True)),
        ("responded_at", models.DateTimeField(blank=True, null=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SupportRequest",
            fields=ticket_fields() + [
                ("category", models.CharField(
                    choices=[("ACCOUNT", "Account"), ("BILLING", "Billing"), ("TECHNICAL", "Technical"),
                             ("JOB_POSTING", "Job Posting"), ("OTHER", "Other")],
                    default="OTHER",
                    max_length=20,
                )),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="support_requests",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("responded_by", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="answered_support_requests", to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [models.Index(fields=["status", "priority"], name="support_status_priority_idx")],
            },
        ),
        migrations.CreateModel(
            name="AdminEscalation",
            fields=ticket_fields() + [
                ("related_id", models.CharField(blank=True, max_length=100, null=True)),
                ("related_type", models.CharField(blank=True, max_length=50, null=True)),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="escalations",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("responded_by", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="answered_escalations", to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [models.Index(fields=["status"], name="escalation_status_idx")],
            },
        ),
    ]
