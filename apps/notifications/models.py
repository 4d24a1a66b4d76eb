from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class NotificationType(models.TextChoices):
    NEW_JOB_POSTING = 'NEW_JOB_POSTING', _('New Job Posting')
    JOB_APPROVED = 'JOB_APPROVED', _('Job Approved')
    JOB_REJECTED = 'JOB_REJECTED', _('Job Rejected')
    JOB_SUSPENDED = 'JOB_SUSPENDED', _('Job Suspended')
    NEW_APPLICATION = 'NEW_APPLICATION', _('New Application')
    APPLICATION_APPROVED = 'APPLICATION_APPROVED', _('Application Approved')
    APPLICATION_REJECTED = 'APPLICATION_REJECTED', _('Application Rejected')
    EMPLOYER_APPROVED = 'EMPLOYER_APPROVED', _('Employer Approved')
    EMPLOYER_REJECTED = 'EMPLOYER_REJECTED', _('Employer Rejected')
    EMPLOYER_SUSPENDED = 'EMPLOYER_SUSPENDED', _('Employer Suspended')
    EMPLOYER_UNSUSPENDED = 'EMPLOYER_UNSUSPENDED', _('Employer Unsuspended')
    NEW_CHAT_MESSAGE = 'NEW_CHAT_MESSAGE', _('New Chat Message')
    INTERVIEW_SCHEDULED = 'INTERVIEW_SCHEDULED', _('Interview Scheduled')
    SYSTEM_ALERT = 'SYSTEM_ALERT', _('System Alert')
    ANNOUNCEMENT = 'ANNOUNCEMENT', _('Announcement')
    NEW_SUPPORT_REQUEST = 'NEW_SUPPORT_REQUEST', _('New Support Request')
    NEW_EMPLOYER_REGISTRATION = 'NEW_EMPLOYER_REGISTRATION', _('New Employer Registration')


class Notification(models.Model):
    """
    A notification for exactly one recipient.
    Immutable once written except for ``is_read`` (UNREAD → READ only).
    """
    IMMUTABLE_FIELDS = ('user_id', 'title', 'message', 'type', 'related_id', 'related_type', 'metadata')

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=50, choices=NotificationType.choices)
    is_read = models.BooleanField(default=False)
    related_id = models.CharField(max_length=100, blank=True, null=True)
    related_type = models.CharField(max_length=50, blank=True, null=True)
    metadata = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [models.Index(fields=['user', 'is_read'], name='notification_user_read_idx')]

    def __str__(self):
        return f"{self.type} → {self.user_id}: {self.title}"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_values = {
            name: value for name, value in zip(field_names, values) if name in cls.IMMUTABLE_FIELDS
        }
        return instance

    def save(self, *args, **kwargs):
        loaded = getattr(self, '_loaded_values', None)
        if not self._state.adding and loaded:
            changed = [name for name, value in loaded.items() if getattr(self, name) != value]
            if changed:
                raise ValueError(f"Notification fields are immutable: {', '.join(changed)}")
        super().save(*args, **kwargs)

    def as_api_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'message': self.message,
            'type': self.type,
            'isRead': self.is_read,
            'relatedId': self.related_id,
            'relatedType': self.related_type,
            'metadata': self.metadata,
            'createdAt': self.created_at.isoformat(),
        }

    def push_payload(self):
        payload = self.as_api_dict()
        payload.pop('isRead')
        return payload


class NotificationDelivery(models.Model):
    """
    Outbox row: one real-time push waiting to be published.
    Written in the same transaction as its Notification; published inline
    when possible and otherwise by ``manage.py deliver_notifications``.
    """
    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        SENDING = 'SENDING', _('Sending')
        DELIVERED = 'DELIVERED', _('Delivered')
        FAILED = 'FAILED', _('Failed')

    notification = models.ForeignKey(
        Notification, on_delete=models.CASCADE, null=True, blank=True, related_name='deliveries'
    )
    channel = models.CharField(max_length=100)
    event = models.CharField(max_length=100)
    payload = models.JSONField(default=dict)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)
    claimed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [models.Index(fields=['status', 'created_at'], name='delivery_status_created_idx')]
        verbose_name_plural = 'notification deliveries'

    def __str__(self):
        return f"{self.event} on {self.channel} [{self.status}]"

    def mark_delivered(self):
        self.status = self.Status.DELIVERED
        self.delivered_at = timezone.now()
        self.last_error = ''
        self.save(update_fields=['status', 'delivered_at', 'last_error', 'attempts'])


class Announcement(models.Model):
    class Type(models.TextChoices):
        GENERAL = 'GENERAL', _('General')
        IMPORTANT = 'IMPORTANT', _('Important')
        URGENT = 'URGENT', _('Urgent')
        UPDATE = 'UPDATE', _('Update')
        EVENT = 'EVENT', _('Event')

    class Status(models.TextChoices):
        DRAFT = 'DRAFT', _('Draft')
        PUBLISHED = 'PUBLISHED', _('Published')
        ARCHIVED = 'ARCHIVED', _('Archived')

    title = models.CharField(max_length=200)
    content = models.TextField()
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.GENERAL)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='announcements'
    )
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def as_api_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'content': self.content,
            'type': self.type,
            'status': self.status,
            'createdBy': self.created_by_id,
            'createdByName': self.created_by.get_full_name() or self.created_by.username,
            'publishedAt': self.published_at.isoformat() if self.published_at else None,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
