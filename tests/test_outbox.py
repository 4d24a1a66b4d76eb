from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from notifications.models import NotificationDelivery, NotificationType
from notifications.services import NotificationService

pytestmark = pytest.mark.django_db


@pytest.fixture
def queued(candidate, publisher):
    service = NotificationService(publisher=publisher, push_inline=False)
    for i in range(3):
        service.notify_user(candidate.pk, f'Queued {i}', 'Body', NotificationType.SYSTEM_ALERT)
    return service


def test_worker_delivers_pending_rows(queued, publisher):
    stats = queued.deliver_pending(batch_size=10)

    assert (stats.delivered, stats.retrying, stats.failed) == (3, 0, 0)
    assert len(publisher.calls) == 3
    assert not NotificationDelivery.objects.exclude(status=NotificationDelivery.Status.DELIVERED).exists()
    assert all(d.delivered_at is not None for d in NotificationDelivery.objects.all())


def test_worker_respects_batch_size(queued):
    assert queued.deliver_pending(batch_size=2).delivered == 2
    assert queued.deliver_pending(batch_size=2).delivered == 1
    assert queued.deliver_pending(batch_size=2).processed == 0


def test_worker_retries_then_gives_up(queued, publisher):
    publisher.fail = True

    first = queued.deliver_pending(max_attempts=2)
    assert (first.retrying, first.failed) == (3, 0)

    second = queued.deliver_pending(max_attempts=2)
    assert (second.retrying, second.failed) == (0, 3)

    assert queued.deliver_pending(max_attempts=2).processed == 0
    for delivery in NotificationDelivery.objects.all():
        assert delivery.status == NotificationDelivery.Status.FAILED
        assert delivery.attempts == 2


def test_deliver_notifications_command(queued, publisher):
    out = StringIO()
    call_command('deliver_notifications', batch_size=10, stdout=out)

    assert '3 delivered' in out.getvalue()
    assert len(publisher.calls) == 3


class SnapshotPublisher:
    """Records the outbox statuses visible at publish time."""

    def __init__(self):
        self.seen = []

    def trigger(self, channel, event, data):
        self.seen.append(sorted(NotificationDelivery.objects.values_list('status', flat=True)))


def test_rows_are_claimed_before_publishing(candidate):
    service = NotificationService(publisher=SnapshotPublisher(), push_inline=False)
    for i in range(2):
        service.notify_user(candidate.pk, f'Queued {i}', 'Body', NotificationType.SYSTEM_ALERT)

    stats = service.deliver_pending(batch_size=10)

    assert stats.delivered == 2
    assert service.publisher.seen[0] == [NotificationDelivery.Status.SENDING] * 2
    assert service.publisher.seen[1] == [NotificationDelivery.Status.DELIVERED, NotificationDelivery.Status.SENDING]


def test_failed_attempt_releases_the_claim(queued, publisher):
    publisher.fail = True
    queued.deliver_pending(batch_size=10)

    for delivery in NotificationDelivery.objects.all():
        assert delivery.status == NotificationDelivery.Status.PENDING
        assert delivery.claimed_at is None


def test_abandoned_claims_are_picked_up_again(queued, publisher):
    first, second, third = NotificationDelivery.objects.order_by('id')
    NotificationDelivery.objects.filter(pk=first.pk).update(
        status=NotificationDelivery.Status.SENDING, claimed_at=timezone.now() - timedelta(hours=1),
    )
    NotificationDelivery.objects.filter(pk=second.pk).update(
        status=NotificationDelivery.Status.SENDING, claimed_at=timezone.now(),
    )

    stats = queued.deliver_pending(batch_size=10)

    assert stats.delivered == 2
    assert NotificationDelivery.objects.get(pk=first.pk).status == NotificationDelivery.Status.DELIVERED
    assert NotificationDelivery.objects.get(pk=second.pk).status == NotificationDelivery.Status.SENDING
    assert NotificationDelivery.objects.get(pk=third.pk).status == NotificationDelivery.Status.DELIVERED
