"""
==========================================================
OUTBOX WORKER: PUBLISH PENDING REAL-TIME NOTIFICATIONS
==========================================================
Run once:     python manage.py deliver_notifications
Run forever:  python manage.py deliver_notifications --loop --interval 5

Publishes NotificationDelivery rows still PENDING (push skipped or failed
inside the request). Delivery is at-least-once; a row is marked FAILED
after --max-attempts attempts.
"""

import logging
import time

from django.core.management.base import BaseCommand, CommandError

from config.constants import OUTBOX_BATCH_SIZE, OUTBOX_MAX_ATTEMPTS, OUTBOX_POLL_INTERVAL_SECONDS
from notifications.services import NotificationService

logger = logging.getLogger('apps.notifications')


class Command(BaseCommand):
    help = 'Publish pending real-time notifications from the outbox.'

    def add_arguments(self, parser):
        parser.add_argument('--batch-size', type=int, default=OUTBOX_BATCH_SIZE)
        parser.add_argument('--max-attempts', type=int, default=OUTBOX_MAX_ATTEMPTS)
        parser.add_argument('--loop', action='store_true', help='Keep polling until interrupted')
        parser.add_argument('--interval', type=int, default=OUTBOX_POLL_INTERVAL_SECONDS,
                            help='Seconds between polls with --loop')

    def handle(self, *args, **options):
        batch_size = options['batch_size']
        max_attempts = options['max_attempts']
        if batch_size < 1 or max_attempts < 1:
            raise CommandError('--batch-size and --max-attempts must be positive')

        service = NotificationService(push_inline=True)
        if service.publisher is None:
            self.stdout.write(self.style.WARNING('⚠️  Push provider not configured; attempts will fail'))

        if not options['loop']:
            self.run_batch(service, batch_size, max_attempts)
            return

        self.stdout.write(self.style.HTTP_INFO(f'📮 Outbox worker started (interval={options["interval"]}s)'))
        try:
            while True:
                stats = self.run_batch(service, batch_size, max_attempts)
                if stats.processed < batch_size:
                    time.sleep(options['interval'])
        except KeyboardInterrupt:
            self.stdout.write('Outbox worker stopped.')

    def run_batch(self, service, batch_size, max_attempts):
        stats = service.deliver_pending(batch_size=batch_size, max_attempts=max_attempts)
        if stats.processed:
            logger.info(
                f"Outbox batch: {stats.delivered} delivered, {stats.retrying} retrying, {stats.failed} failed"
            )
        self.stdout.write(
            f'  ✅ {stats.delivered} delivered | 🔁 {stats.retrying} retrying | ❌ {stats.failed} failed'
        )
        return stats
