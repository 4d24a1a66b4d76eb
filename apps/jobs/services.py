import logging
from datetime import timedelta

from django.utils import timezone

from config.constants import JOB_DEFAULT_TTL_DAYS, JOB_TITLE_MAX_LENGTH, MSG_EMPLOYER_NOT_APPROVED
from core.exceptions import InvalidStateError, ValidationError
from notifications.services import NotificationService
from notifications import templates
from users.models import Employer
from .models import Job

logger = logging.getLogger('apps.jobs')


class JobService:
    def __init__(self, notifier=None):
        self.notifier = notifier or NotificationService()

    def submit(self, employer, title, description, **fields):
        """
        Create a PENDING job for an approved, active employer and queue it for moderation.
        - expires_at defaults to JOB_DEFAULT_TTL_DAYS from now.
        - Every admin gets a NEW_JOB_POSTING notification.
        Returns (job, dispatch_result).
        """
        if employer.verification_status != Employer.VerificationStatus.APPROVED or employer.is_suspended:
            raise InvalidStateError(MSG_EMPLOYER_NOT_APPROVED)
        title = (title or '').strip()
        if not title:
            raise ValidationError("Job title is required")
        if len(title) > JOB_TITLE_MAX_LENGTH:
            raise ValidationError(f"Job title must be at most {JOB_TITLE_MAX_LENGTH} characters")

        fields.setdefault('expires_at', timezone.now() + timedelta(days=JOB_DEFAULT_TTL_DAYS))
        job = Job.objects.create(
            employer=employer,
            title=title,
            description=description,
            status=Job.Status.PENDING,
            **fields
        )
        logger.info(f"Job submitted for moderation: '{job.title}' (id={job.pk}, employer={employer.pk})")

        result = self.notifier.notify_all_admins(
            **templates.job_posted(job.title, employer.company_name, job.pk)
        )
        return job, result
