import pytest

from config.constants import JOB_TITLE_MAX_LENGTH
from core.exceptions import InvalidStateError, ValidationError
from jobs.models import Job
from jobs.services import JobService
from notifications.models import Notification, NotificationType
from users.models import Employer, User
from users.services import EmployerService

from conftest import make_user

pytestmark = pytest.mark.django_db


def test_register_employer_is_pending_and_alerts_admins(notifier, admin_user):
    user = make_user('newco_owner')

    employer, result = EmployerService(notifier).register(user, 'NewCo', industry='Retail')

    user.refresh_from_db()
    assert user.role == User.Role.EMPLOYER
    assert user.status == User.Status.PENDING
    assert employer.verification_status == Employer.VerificationStatus.PENDING
    assert [n.type for n in result.notifications] == [NotificationType.NEW_EMPLOYER_REGISTRATION]
    assert Notification.objects.get().user == admin_user


def test_submit_job_for_approved_employer(notifier, admin_user, approved_employer):
    job, result = JobService(notifier).submit(approved_employer, ' Data Analyst ', 'Crunch numbers')

    assert job.status == Job.Status.PENDING
    assert job.title == 'Data Analyst'
    assert job.expires_at is not None
    assert result.notifications[0].type == NotificationType.NEW_JOB_POSTING


def test_pending_employer_cannot_submit_jobs(notifier, employer):
    with pytest.raises(InvalidStateError):
        JobService(notifier).submit(employer, 'Data Analyst', 'Crunch numbers')
    assert not Job.objects.exists()


@pytest.mark.parametrize('title', ['   ', 'x' * (JOB_TITLE_MAX_LENGTH + 1)])
def test_job_title_is_validated(notifier, approved_employer, title):
    with pytest.raises(ValidationError):
        JobService(notifier).submit(approved_employer, title, 'Crunch numbers')
    assert not Job.objects.exists()
