import logging

from django.db import transaction
from django.utils import timezone

from config.constants import MSG_RESPONSE_REQUIRED, MSG_SUPPORT_NOT_FOUND, MSG_ESCALATION_NOT_FOUND
from core.exceptions import NotFoundError, ValidationError
from core.models import AdminLog
from notifications import templates
from notifications.services import NotificationService
from .models import AdminEscalation, SupportRequest, TicketPriority, TicketStatus

logger = logging.getLogger('apps.support')


class SupportService:
    def __init__(self, notifier=None):
        self.notifier = notifier or NotificationService()

    # -------------------------------------------------------
    # Opening tickets (employer / candidate side)
    # -------------------------------------------------------

    def open_request(self, user, subject, message, priority=TicketPriority.MEDIUM, category=None):
        subject, message = self._clean(subject, message)
        fields = {'category': category} if category else {}
        ticket = SupportRequest.objects.create(
            user=user, subject=subject, message=message, priority=priority, **fields
        )
        logger.info(f"Support request {ticket.pk} opened by {user.username}: {subject}")
        result = self.notifier.notify_all_admins(
            **templates.support_request_opened(subject, user.display_name, ticket.pk)
        )
        return ticket, result

    def open_escalation(self, user, subject, message, priority=TicketPriority.HIGH,
                        related_id=None, related_type=None):
        subject, message = self._clean(subject, message)
        ticket = AdminEscalation.objects.create(
            user=user, subject=subject, message=message, priority=priority,
            related_id=related_id, related_type=related_type,
        )
        logger.info(f"Escalation {ticket.pk} opened by {user.username}: {subject}")
        result = self.notifier.notify_all_admins(
            **templates.support_request_opened(subject, user.display_name, ticket.pk, related_type='escalation')
        )
        return ticket, result

    # -------------------------------------------------------
    # Admin side
    # -------------------------------------------------------

    def get_request(self, pk):
        try:
            return SupportRequest.objects.select_related('user').get(pk=pk)
        except SupportRequest.DoesNotExist:
            raise NotFoundError(MSG_SUPPORT_NOT_FOUND)

    def get_escalation(self, pk):
        try:
            return AdminEscalation.objects.select_related('user').get(pk=pk)
        except AdminEscalation.DoesNotExist:
            raise NotFoundError(MSG_ESCALATION_NOT_FOUND)

    def respond(self, ticket, admin, response, status=None, priority=None):
        """
        Store the admin's answer and move the ticket along.
        Without an explicit status an OPEN ticket becomes IN_PROGRESS.
        The submitter gets a SYSTEM_ALERT notification after the commit.
        Returns (ticket, dispatch_result).
        """
        response = (response or '').strip()
        if not response:
            raise ValidationError(MSG_RESPONSE_REQUIRED)
        if status and status not in TicketStatus.values:
            raise ValidationError(f"Unknown status: {status}")
        if priority and priority not in TicketPriority.values:
            raise ValidationError(f"Unknown priority: {priority}")

        if not status:
            status = TicketStatus.IN_PROGRESS if ticket.status == TicketStatus.OPEN else ticket.status

        is_escalation = isinstance(ticket, AdminEscalation)
        related_type = 'escalation' if is_escalation else 'support_request'
        action = AdminLog.Action.ESCALATION_RESPONDED if is_escalation else AdminLog.Action.SUPPORT_RESPONDED

        with transaction.atomic():
            ticket.admin_response = response
            ticket.status = status
            if priority:
                ticket.priority = priority
            ticket.responded_by = admin
            ticket.responded_at = timezone.now()
            ticket.save()
            AdminLog.record(
                admin, action, ticket, entity_type=related_type.upper(),
                description=f"Responded to {related_type.replace('_', ' ')}: {ticket.subject}",
                status=status,
            )

        logger.info(f"{related_type} {ticket.pk} answered by {admin.username} (status={status})")
        result = self.notifier.notify_user(
            ticket.user_id,
            **templates.support_request_answered(ticket.subject, status, ticket.pk, related_type=related_type)
        )
        return ticket, result

    def update_request(self, ticket, admin, status=None, priority=None):
        """Change status/priority without a written response."""
        if status and status not in TicketStatus.values:
            raise ValidationError(f"Unknown status: {status}")
        if priority and priority not in TicketPriority.values:
            raise ValidationError(f"Unknown priority: {priority}")
        if status:
            ticket.status = status
        if priority:
            ticket.priority = priority
        ticket.save(update_fields=['status', 'priority', 'updated_at'])
        logger.info(f"support_request {ticket.pk} updated by {admin.username} (status={ticket.status})")
        return ticket

    def _clean(self, subject, message):
        subject = (subject or '').strip()
        message = (message or '').strip()
        if not subject or not message:
            raise ValidationError("Subject and message are required")
        return subject, message
