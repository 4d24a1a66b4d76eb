import pytest
from django.core.cache import cache
from django.test import Client
from django.utils import timezone

from jobs.models import Job
from moderation.services import ModerationService
from notifications.services import NotificationService
from users.models import Employer, User


class FakePublisher:
    """Stands in for pusher.Pusher: records trigger() calls, optionally fails."""

    def __init__(self):
        self.calls = []
        self.fail = False

    def trigger(self, channel, event, data):
        if self.fail:
            raise ConnectionError("push provider unreachable")
        self.calls.append((channel, event, data))

    @property
    def channels(self):
        return [channel for channel, _, _ in self.calls]


@pytest.fixture(autouse=True)
def publisher(monkeypatch):
    fake = FakePublisher()
    monkeypatch.setattr('notifications.services.build_publisher', lambda: fake)
    return fake


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def notifier(publisher):
    return NotificationService(publisher=publisher, push_inline=True)


@pytest.fixture
def moderation(notifier):
    return ModerationService(notifier)


def make_user(username, role=User.Role.CANDIDATE, **extra):
    return User.objects.create_user(username, f'{username}@example.com', 'password', role=role, **extra)


def make_employer(username, company_name, status=Employer.VerificationStatus.PENDING, **extra):
    user = make_user(username, role=User.Role.EMPLOYER, status=User.Status.PENDING)
    if status != Employer.VerificationStatus.PENDING:
        extra.setdefault('verified_at', timezone.now())
    return Employer.objects.create(user=user, company_name=company_name, verification_status=status, **extra)


def make_job(employer, title='Backend Engineer', status=Job.Status.PENDING, **extra):
    if status != Job.Status.PENDING:
        extra.setdefault('moderated_at', timezone.now())
    return Job.objects.create(employer=employer, title=title, description='Build APIs.', status=status, **extra)


@pytest.fixture
def admin_user(db):
    return make_user('admin1', role=User.Role.ADMIN, first_name='Ada', last_name='Admin')


@pytest.fixture
def candidate(db):
    return make_user('candidate1')


@pytest.fixture
def employer(db):
    return make_employer('acme_owner', 'Acme Corp')


@pytest.fixture
def approved_employer(db):
    return make_employer('globex_owner', 'Globex', status=Employer.VerificationStatus.APPROVED)


@pytest.fixture
def pending_job(approved_employer):
    return make_job(approved_employer, title='Data Engineer')


@pytest.fixture
def approved_job(approved_employer):
    return make_job(approved_employer, title='Senior Python Developer', status=Job.Status.APPROVED)


@pytest.fixture
def admin_client(admin_user):
    client = Client()
    client.force_login(admin_user)
    return client
