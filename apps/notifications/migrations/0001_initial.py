import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

NOTIFICATION_TYPES = [
    ("NEW_JOB_POSTING", "New Job Posting"),
    ("JOB_APPROVED", "Job Approved"),
    ("JOB_REJECTED", "Job Rejected"),
    ("JOB_SUSPENDED", "Job Suspended"),
    ("NEW_APPLICATION", "New Application"),
    ("APPLICATION_APPROVED", "Application Approved"),
    ("APPLICATION_REJECTED", "Application Rejected"),
    ("EMPLOYER_APPROVED", "Employer Approved"),
    ("EMPLOYER_REJECTED", "Employer Rejected"),
    ("EMPLOYER_SUSPENDED", "Employer Suspended"),
    ("EMPLOYER_UNSUSPENDED", "Employer Unsuspended"),
    ("NEW_CHAT_MESSAGE", "New Chat Message"),
    ("INTERVIEW_SCHEDULED", "Interview Scheduled"),
    ("SYSTEM_ALERT", "System Alert"),
    ("ANNOUNCEMENT", "Announcement"),
    ("NEW_SUPPORT_REQUEST", "New Support Request"),
    ("NEW_EMPLOYER_REGISTRATION", "New Employer Registration"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("type", models.CharField(choices=NOTIFICATION_TYPES, max_length=50)),
                ("is_read", models.BooleanField(default=False)),
                ("related_id", models.CharField(blank=True, max_length=100, null=True)),
                ("related_type", models.CharField(blank=True, max_length=50, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="notifications",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["user", "is_read"], name="notification_user_read_idx")],
            },
        ),
        migrations.CreateModel(
            name="NotificationDelivery",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("channel", models.CharField(max_length=100)),
                ("event", models.CharField(max_length=100)),
                ("payload", models.JSONField(default=dict)),
                ("status", models.CharField(
                    choices=[("PENDING", "Pending"), ("SENDING", "Sending"), ("DELIVERED", "Delivered"), ("FAILED", "Failed")],
                    default="PENDING",
                    max_length=20,
                )),
                ("attempts", models.PositiveIntegerField(default=0)),
                ("last_error", models.TextField(blank=True)),
                ("claimed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("notification", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.CASCADE,
                    related_name="deliveries", to="notifications.notification",
                )),
            ],
            options={
                "verbose_name_plural": "notification deliveries",
                "ordering": ["created_at", "id"],
                "indexes": [models.Index(fields=["status", "created_at"], name="delivery_status_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Announcement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("content", models.TextField()),
                ("type", models.CharField(
                    choices=[("GENERAL", "General"), ("IMPORTANT", "Important"), ("URGENT", "Urgent"),
                             ("UPDATE", "Update"), ("EVENT", "Event")],
                    default="GENERAL",
                    max_length=20,
                )),
                ("status", models.CharField(
                    choices=[("DRAFT", "Draft"), ("PUBLISHED", "Published"), ("ARCHIVED", "Archived")],
                    default="DRAFT",
                    max_length=20,
                )),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="announcements",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
