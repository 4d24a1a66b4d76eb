import logging

from django.db import transaction

from notifications.services import NotificationService
from notifications import templates
from .models import User, Employer

logger = logging.getLogger('apps.users')


class EmployerService:
    def __init__(self, notifier=None):
        self.notifier = notifier or NotificationService()

    def register(self, user, company_name, **profile):
        """
        Create a PENDING employer profile for ``user`` and tell every admin.
        Returns (employer, dispatch_result).
        """
        with transaction.atomic():
            user.role = User.Role.EMPLOYER
            user.status = User.Status.PENDING
            user.save(update_fields=['role', 'status'])
            employer = Employer.objects.create(user=user, company_name=company_name, **profile)

        logger.info(f"Employer registered: {employer.company_name} (id={employer.pk}, user={user.username})")
        result = self.notifier.notify_all_admins(
            **templates.employer_registered(employer.company_name, employer.pk)
        )
        return employer, result
