"""
Notification dispatcher.

Every notification is written as a durable row plus an outbox row
(NotificationDelivery). The database write always happens first; the
real-time push is attempted afterwards with a bounded timeout and its
failure only degrades delivery ("the recipient sees it on next poll"),
it never fails the calling operation.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Q
from django.utils import timezone

from config.constants import (
    OUTBOX_BATCH_SIZE, OUTBOX_MAX_ATTEMPTS, OUTBOX_CLAIM_TIMEOUT_SECONDS,
    PUSH_EVENT_NOTIFICATION, PUSH_EVENT_GLOBAL,
    MSG_DELIVERY_DEGRADED, MSG_NOTIFICATION_NOT_FOUND, MSG_NOTIFICATION_FORBIDDEN, MSG_USER_NOT_FOUND,
)
from core.exceptions import DeliveryDegraded, ForbiddenError, NotFoundError
from .models import Notification, NotificationDelivery, NotificationType
from .realtime import build_publisher, global_channel_name, user_channel_name

logger = logging.getLogger('apps.notifications')

User = get_user_model()


@dataclass
class DispatchResult:
    notifications: List[Notification] = field(default_factory=list)
    warnings: List[DeliveryDegraded] = field(default_factory=list)

    @property
    def degraded(self):
        return bool(self.warnings)

    def extend(self, other):
        self.notifications.extend(other.notifications)
        self.warnings.extend(other.warnings)
        return self


@dataclass
class DeliveryStats:
    delivered: int = 0
    retrying: int = 0
    failed: int = 0

    @property
    def processed(self):
        return self.delivered + self.retrying + self.failed


class NotificationService:
    """
    Fan out logical events to recipients.

    ``publisher`` is anything with ``trigger(channel, event, data)`` (a
    ``pusher.Pusher`` in production). When omitted it is built lazily from
    SystemSettings / environment settings.
    """

    def __init__(self, publisher=None, push_inline=None):
        self._publisher = publisher
        self._publisher_resolved = publisher is not None
        self.push_inline = settings.NOTIFICATIONS_PUSH_INLINE if push_inline is None else push_inline

    @property
    def publisher(self):
        if not self._publisher_resolved:
            self._publisher = build_publisher()
            self._publisher_resolved = True
        return self._publisher

    # -------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------

    def notify_user(self, user_id, title, message, type, related_id=None, related_type=None, metadata=None):
        """Create one notification for ``user_id`` and push it on ``user-<id>``."""
        if not User.objects.filter(pk=user_id).exists():
            raise NotFoundError(MSG_USER_NOT_FOUND)

        notification, delivery = self._persist(user_id, title, message, type, related_id, related_type, metadata)
        return DispatchResult([notification], self._push([delivery]))

    def notify_all_admins(self, title, message, type, related_id=None, related_type=None, metadata=None):
        admin_ids = list(
            User.objects.filter(role=User.Role.ADMIN, is_active=True, is_deleted=False)
            .values_list('id', flat=True)
        )
        return self._fan_out(admin_ids, title, message, type, related_id, related_type, metadata)

    def broadcast_announcement(self, announcement_id, title, content, type):
        """Notify every non-deleted user; each one gets the push on their own channel."""
        user_ids = list(User.objects.filter(is_deleted=False).values_list('id', flat=True))
        logger.info(f"📣 Broadcasting announcement {announcement_id} to {len(user_ids)} users")

        return self._fan_out(
            user_ids, title, content, NotificationType.ANNOUNCEMENT,
            related_id=str(announcement_id),
            related_type='announcement',
            metadata={'announcementType': type},
        )

    def notify_global(self, title, message, type, metadata=None):
        """Push-only event on the global channel; no Notification rows."""
        delivery = NotificationDelivery.objects.create(
            channel=global_channel_name(),
            event=PUSH_EVENT_GLOBAL,
            payload={
                'title': title,
                'message': message,
                'type': type,
                'metadata': metadata,
                'timestamp': timezone.now().isoformat(),
            },
        )
        return DispatchResult([], self._push([delivery]))

    # -------------------------------------------------------
    # Read state
    # -------------------------------------------------------

    def mark_read(self, notification_id, user_id):
        try:
            notification = Notification.objects.get(pk=notification_id)
        except Notification.DoesNotExist:
            raise NotFoundError(MSG_NOTIFICATION_NOT_FOUND)

        if notification.user_id != user_id:
            raise ForbiddenError(MSG_NOTIFICATION_FORBIDDEN)

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=['is_read'])
        return notification

    def mark_all_read(self, user_id):
        """Flip every unread notification of ``user_id``; returns the number flipped."""
        return Notification.objects.filter(user_id=user_id, is_read=False).update(is_read=True)

    # -------------------------------------------------------
    # Outbox delivery
    # -------------------------------------------------------

    def deliver(self, delivery, max_attempts=OUTBOX_MAX_ATTEMPTS):
        """
        Publish one outbox row. Returns None on success, a DeliveryDegraded otherwise.
        The row becomes FAILED once ``max_attempts`` is reached.
        """
        delivery.attempts += 1
        publisher = self.publisher

        if publisher is None:
            error = "push provider not configured"
        else:
            try:
                publisher.trigger(delivery.channel, delivery.event, delivery.payload)
            except Exception as exc:  # provider/network errors of any kind
                error = f"{type(exc).__name__}: {exc}"
            else:
                delivery.mark_delivered()
                return None

        delivery.last_error = error
        delivery.claimed_at = None
        if delivery.attempts >= max_attempts:
            delivery.status = NotificationDelivery.Status.FAILED
        else:
            delivery.status = NotificationDelivery.Status.PENDING
        delivery.save(update_fields=['attempts', 'last_error', 'status', 'claimed_at'])

        logger.warning(
            f"⚠️  Push failed on {delivery.channel} (delivery={delivery.pk}, "
            f"attempt={delivery.attempts}, status={delivery.status}): {error}"
        )
        user_id = delivery.notification.user_id if delivery.notification_id else None
        return DeliveryDegraded(MSG_DELIVERY_DEGRADED, user_id=user_id, channel=delivery.channel)

    def deliver_pending(self, batch_size=OUTBOX_BATCH_SIZE, max_attempts=OUTBOX_MAX_ATTEMPTS):
        """Drain one batch of PENDING outbox rows (at-least-once)."""
        stats = DeliveryStats()
        for delivery in self.claim_pending(batch_size):
            if self.deliver(delivery, max_attempts=max_attempts) is None:
                stats.delivered += 1
            elif delivery.status == NotificationDelivery.Status.FAILED:
                stats.failed += 1
            else:
                stats.retrying += 1
        return stats

    def claim_pending(self, batch_size=OUTBOX_BATCH_SIZE):
        """
        Mark a batch as SENDING and commit before anything is published, so
        no row lock is held across network calls. Rows left SENDING longer
        than OUTBOX_CLAIM_TIMEOUT_SECONDS (a crashed worker) are claimed again.
        """
        now = timezone.now()
        abandoned = Q(status=NotificationDelivery.Status.SENDING,
                      claimed_at__lt=now - timedelta(seconds=OUTBOX_CLAIM_TIMEOUT_SECONDS))
        with transaction.atomic():
            batch = list(
                NotificationDelivery.objects
                .select_for_update(skip_locked=True, of=('self',))
                .select_related('notification')
                .filter(Q(status=NotificationDelivery.Status.PENDING) | abandoned)
                .order_by('created_at', 'id')[:batch_size]
            )
            NotificationDelivery.objects.filter(pk__in=[d.pk for d in batch]).update(
                status=NotificationDelivery.Status.SENDING, claimed_at=now,
            )
        for delivery in batch:
            delivery.status = NotificationDelivery.Status.SENDING
            delivery.claimed_at = now
        return batch

    # -------------------------------------------------------
    # Internals
    # -------------------------------------------------------

    def _persist(self, user_id, title, message, type, related_id, related_type, metadata):
        with transaction.atomic():
            notification = Notification.objects.create(
                user_id=user_id,
                title=title,
                message=message,
                type=type,
                related_id=related_id,
                related_type=related_type,
                metadata=metadata,
            )
            delivery = NotificationDelivery.objects.create(
                notification=notification,
                channel=user_channel_name(user_id),
                event=PUSH_EVENT_NOTIFICATION,
                payload=notification.push_payload(),
            )
        return notification, delivery

    def _fan_out(self, user_ids, title, message, type, related_id=None, related_type=None, metadata=None):
        """One row per recipient, then one push per recipient. Partial failures are logged, not raised."""
        result = DispatchResult()
        deliveries = []
        for user_id in user_ids:
            try:
                notification, delivery = self._persist(
                    user_id, title, message, type, related_id, related_type, metadata
                )
            except DatabaseError as exc:
                logger.exception(f"Could not store {type} notification for user {user_id}")
                result.warnings.append(
                    DeliveryDegraded(f"Could not notify user {user_id}: {exc}", user_id=user_id)
                )
                continue
            result.notifications.append(notification)
            deliveries.append(delivery)

        result.warnings.extend(self._push(deliveries))
        if result.warnings:
            logger.warning(
                f"{type} fan-out: {len(result.notifications)}/{len(user_ids)} stored, "
                f"{len(result.warnings)} degraded"
            )
        return result

    def _push(self, deliveries):
        if not self.push_inline:
            return []
        warnings = []
        for delivery in deliveries:
            warning = self.deliver(delivery)
            if warning is not None:
                warnings.append(warning)
        return warnings
