import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Job",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("requirements", models.TextField(blank=True)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("salary_range", models.CharField(blank=True, max_length=100)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("employment_type", models.CharField(
                    choices=[("FULL_TIME", "Full Time"), ("PART_TIME", "Part Time"), ("CONTRACT", "Contract"),
                             ("INTERNSHIP", "Internship")],
                    default="FULL_TIME",
                    max_length=20,
                )),
                ("status", models.CharField(
                    choices=[("PENDING", "Pending"), ("APPROVED", "Approved"), ("REJECTED", "Rejected"),
                             ("SUSPENDED", "Suspended"), ("CLOSED", "Closed")],
                    default="PENDING",
                    max_length=20,
                )),
                ("moderation_notes", models.TextField(blank=True, null=True)),
                ("moderated_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employer", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="jobs", to="users.employer",
                )),
                ("moderated_by", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="moderated_jobs", to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
