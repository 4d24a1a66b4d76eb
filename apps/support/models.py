from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _


class TicketStatus(models.TextChoices):
    OPEN = 'OPEN', _('Open')
    IN_PROGRESS = 'IN_PROGRESS', _('In Progress')
    RESOLVED = 'RESOLVED', _('Resolved')
    CLOSED = 'CLOSED', _('Closed')


class TicketPriority(models.TextChoices):
    LOW = 'LOW', _('Low')
    MEDIUM = 'MEDIUM', _('Medium')
    HIGH = 'HIGH', _('High')
    URGENT = 'URGENT', _('Urgent')


class Ticket(models.Model):
    """Fields shared by support requests and escalations."""
    subject = models.CharField(max_length=200)
    message = models.TextField()
    status = models.CharField(max_length=20, choices=TicketStatus.choices, default=TicketStatus.OPEN)
    priority = models.CharField(max_length=20, choices=TicketPriority.choices, default=TicketPriority.MEDIUM)
    admin_response = models.TextField(blank=True, null=True)
    responded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.status}] {self.subject}"

    def as_api_dict(self):
        return {
            'id': self.pk,
            'subject': self.subject,
            'message': self.message,
            'status': self.status,
            'priority': self.priority,
            'adminResponse': self.admin_response,
            'respondedAt': self.responded_at.isoformat() if self.responded_at else None,
            'respondedBy': self.responded_by_id,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
            'user': self.user.as_api_dict(),
        }


class SupportRequest(Ticket):
    """A help request opened by an employer or candidate."""
    class Category(models.TextChoices):
        ACCOUNT = 'ACCOUNT', _('Account')
        BILLING = 'BILLING', _('Billing')
        TECHNICAL = 'TECHNICAL', _('Technical')
        JOB_POSTING = 'JOB_POSTING', _('Job Posting')
        OTHER = 'OTHER', _('Other')

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='support_requests'
    )
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='answered_support_requests'
    )

    class Meta(Ticket.Meta):
        indexes = [models.Index(fields=['status', 'priority'], name='support_status_priority_idx')]

    def as_api_dict(self):
        data = super().as_api_dict()
        data['category'] = self.category
        return data


class AdminEscalation(Ticket):
    """An issue escalated to the admin team, optionally about a specific record."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='escalations'
    )
    related_id = models.CharField(max_length=100, blank=True, null=True)
    related_type = models.CharField(max_length=50, blank=True, null=True)
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='answered_escalations'
    )

    class Meta(Ticket.Meta):
        indexes = [models.Index(fields=['status'], name='escalation_status_idx')]

    def as_api_dict(self):
        data = super().as_api_dict()
        data.update({'relatedId': self.related_id, 'relatedType': self.related_type})
        return data
