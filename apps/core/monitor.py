import time
from django.db import connections
from django.db.utils import OperationalError

from config.constants import OUTBOX_BACKLOG_WARNING
from .models import SystemSettings


class SystemMonitor:
    def check_all(self):
        """
        Run all system checks and return a dict of results.
        """
        checks = {
            'database': self.check_database(),
            'push': self.check_push_provider(),
            'outbox': self.check_outbox(),
        }
        checks['healthy'] = all(c['status'] != 'Failed' for c in checks.values())
        return checks

    def check_database(self):
        """
        Check connectivity to the default database.
        """
        start = time.time()
        status = "Operational"
        error = None
        try:
            conn = connections['default']
            conn.ensure_connection()
        except OperationalError as e:
            status = "Failed"
            error = str(e)

        duration = (time.time() - start) * 1000
        return {
            'name': 'Default Database',
            'status': status,
            'durationMs': round(duration, 2),
            'error': error
        }

    def check_push_provider(self):
        """
        Report where push credentials come from. Only configuration is checked;
        no event is published.
        """
        from django.conf import settings

        if SystemSettings.load().has_pusher_credentials:
            source = 'database'
        elif settings.PUSHER_APP_ID and settings.PUSHER_KEY and settings.PUSHER_SECRET:
            source = 'environment'
        else:
            source = None

        return {
            'name': 'Push Provider (Pusher)',
            'status': 'Operational' if source else 'Degraded',
            'source': source,
            'inline': settings.NOTIFICATIONS_PUSH_INLINE,
            'error': None if source else 'Pusher credentials not configured; notifications stay in the outbox',
        }

    def check_outbox(self):
        """
        Count outbox rows waiting for (or given up on) delivery.
        """
        from notifications.models import NotificationDelivery

        pending = NotificationDelivery.objects.filter(
            status__in=[NotificationDelivery.Status.PENDING, NotificationDelivery.Status.SENDING]
        ).count()
        failed = NotificationDelivery.objects.filter(status=NotificationDelivery.Status.FAILED).count()
        degraded = pending >= OUTBOX_BACKLOG_WARNING or failed > 0
        return {
            'name': 'Notification Outbox',
            'status': 'Degraded' if degraded else 'Operational',
            'pending': pending,
            'failed': failed,
            'error': f"{pending} pending / {failed} failed deliveries" if degraded else None,
        }
