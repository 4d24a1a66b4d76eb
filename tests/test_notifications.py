import pytest

from core.exceptions import ForbiddenError, NotFoundError
from notifications import templates
from notifications.models import Notification, NotificationDelivery, NotificationType
from users.models import User

from conftest import make_user

pytestmark = pytest.mark.django_db


def test_notify_user_writes_row_and_pushes(notifier, candidate, publisher):
    result = notifier.notify_user(
        candidate.pk, 'Hello', 'Welcome aboard', NotificationType.SYSTEM_ALERT,
        related_id='42', related_type='job', metadata={'source': 'test'},
    )

    notification = Notification.objects.get()
    assert result.notifications == [notification]
    assert not result.degraded
    assert notification.is_read is False
    assert notification.metadata == {'source': 'test'}

    channel, event, payload = publisher.calls[0]
    assert channel == f'user-{candidate.pk}'
    assert event == 'new-notification'
    assert payload['id'] == notification.pk
    assert payload['relatedId'] == '42'
    assert 'isRead' not in payload
    assert NotificationDelivery.objects.get().status == NotificationDelivery.Status.DELIVERED


def test_notify_unknown_user(notifier):
    with pytest.raises(NotFoundError):
        notifier.notify_user(424242, 'x', 'y', NotificationType.SYSTEM_ALERT)


def test_notifications_are_immutable_except_read_flag(notifier, candidate):
    notification = notifier.notify_user(candidate.pk, 'Hello', 'Body', NotificationType.SYSTEM_ALERT).notifications[0]
    notification = Notification.objects.get(pk=notification.pk)

    notification.is_read = True
    notification.save()

    notification.title = 'Edited'
    with pytest.raises(ValueError):
        notification.save()


def test_mark_read_only_for_owner(notifier, candidate, admin_user):
    notification = notifier.notify_user(candidate.pk, 'Hello', 'Body', NotificationType.SYSTEM_ALERT).notifications[0]

    with pytest.raises(ForbiddenError):
        notifier.mark_read(notification.pk, admin_user.pk)
    with pytest.raises(NotFoundError):
        notifier.mark_read(987654, candidate.pk)

    assert notifier.mark_read(notification.pk, candidate.pk).is_read
    # second call is a no-op
    assert notifier.mark_read(notification.pk, candidate.pk).is_read


def test_mark_all_read_counts_only_flipped_rows_of_that_user(notifier, candidate, admin_user):
    for i in range(3):
        notifier.notify_user(candidate.pk, f'N{i}', 'Body', NotificationType.SYSTEM_ALERT)
    other = notifier.notify_user(admin_user.pk, 'Other', 'Body', NotificationType.SYSTEM_ALERT).notifications[0]
    first = Notification.objects.filter(user=candidate).first()
    notifier.mark_read(first.pk, candidate.pk)

    assert notifier.mark_all_read(candidate.pk) == 2
    assert notifier.mark_all_read(candidate.pk) == 0
    assert Notification.objects.filter(user=candidate, is_read=False).count() == 0
    other.refresh_from_db()
    assert other.is_read is False


def test_notify_all_admins_skips_inactive_and_deleted(notifier, admin_user, candidate, publisher):
    second = make_user('admin2', role=User.Role.ADMIN)
    make_user('admin3', role=User.Role.ADMIN, is_active=False)
    make_user('admin4', role=User.Role.ADMIN, is_deleted=True)

    result = notifier.notify_all_admins(**templates.employer_registered('Acme Corp', 7))

    recipients = sorted(n.user_id for n in result.notifications)
    assert recipients == sorted([admin_user.pk, second.pk])
    assert sorted(publisher.channels) == sorted([f'user-{admin_user.pk}', f'user-{second.pk}'])
    assert all(n.type == NotificationType.NEW_EMPLOYER_REGISTRATION for n in result.notifications)


def test_admin_fan_out_survives_push_failures(notifier, admin_user, publisher):
    make_user('admin2', role=User.Role.ADMIN)
    publisher.fail = True

    result = notifier.notify_all_admins(**templates.job_posted('Data Engineer', 'Globex', 3))

    assert len(result.notifications) == 2
    assert len(result.warnings) == 2
    assert Notification.objects.count() == 2
    assert NotificationDelivery.objects.filter(status=NotificationDelivery.Status.PENDING).count() == 2


def test_broadcast_announcement_reaches_every_active_user(notifier, admin_user, publisher):
    users = [admin_user] + [make_user(f'user{i}') for i in range(4)]
    deleted = make_user('ghost', is_deleted=True)

    result = notifier.broadcast_announcement(11, 'Maintenance', 'Down at 2am', 'SYSTEM_ALERT')

    assert Notification.objects.count() == len(users)
    assert not Notification.objects.filter(user=deleted).exists()
    assert len(result.notifications) == len(users)
    for notification in Notification.objects.all():
        assert notification.type == NotificationType.ANNOUNCEMENT
        assert notification.related_id == '11'
        assert notification.related_type == 'announcement'
        assert notification.metadata == {'announcementType': 'SYSTEM_ALERT'}

    assert sorted(publisher.channels) == sorted(f'user-{u.pk}' for u in users)
    assert {event for _, event, _ in publisher.calls} == {'new-notification'}


def test_notify_global_writes_no_notification_rows(notifier, publisher):
    notifier.notify_global('Heads up', 'Deploy in 5 minutes', NotificationType.SYSTEM_ALERT)

    assert Notification.objects.count() == 0
    channel, event, payload = publisher.calls[0]
    assert (channel, event) == ('global', 'global-notification')
    assert payload['title'] == 'Heads up'


def test_push_disabled_leaves_outbox_pending(candidate, publisher):
    from notifications.services import NotificationService
    service = NotificationService(publisher=publisher, push_inline=False)

    result = service.notify_user(candidate.pk, 'Hello', 'Body', NotificationType.SYSTEM_ALERT)

    assert not result.degraded
    assert publisher.calls == []
    assert NotificationDelivery.objects.get().status == NotificationDelivery.Status.PENDING
