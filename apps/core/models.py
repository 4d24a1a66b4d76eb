from django.db import models
from django.core.cache import cache
from django.conf import settings

from config.constants.branding import SITE_NAME, COMPANY_EMAIL


class SystemSettings(models.Model):
    """
    Singleton model to store platform configuration editable from the admin panel.
    Push provider credentials stored here override the environment settings.
    """
    # Branding
    site_name = models.CharField(max_length=100, default=SITE_NAME)
    contact_email = models.EmailField(default=COMPANY_EMAIL)

    # Real-time push (Pusher)
    pusher_app_id = models.CharField(max_length=100, blank=True)
    pusher_key = models.CharField(max_length=100, blank=True)
    encrypted_pusher_secret = models.TextField(blank=True, help_text="Encrypted Pusher secret")
    pusher_cluster = models.CharField(max_length=20, blank=True, default='mt1')
    push_timeout_seconds = models.PositiveIntegerField(
        null=True, blank=True, help_text="Overrides PUSHER_TIMEOUT_SECONDS when set"
    )

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return "System Settings"

    def save(self, *args, **kwargs):
        self.pk = 1  # Singleton: always ID 1
        super().save(*args, **kwargs)
        cache.delete('system_settings')  # Invalidate cache on save

    def delete(self, *args, **kwargs):
        pass  # Prevent deletion

    @classmethod
    def load(cls):
        """
        Load the singleton instance. Create if not exists.
        """
        if cache.get('system_settings') is None:
            obj, created = cls.objects.get_or_create(pk=1)
            cache.set('system_settings', obj)
        return cache.get('system_settings')

    @property
    def has_pusher_credentials(self):
        return bool(self.pusher_app_id and self.pusher_key and self.encrypted_pusher_secret)


class AdminLog(models.Model):
    """
    Append-only audit record of an admin action. Rows are never updated or deleted.
    """
    class Action(models.TextChoices):
        EMPLOYER_APPROVED = 'EMPLOYER_APPROVED'
        EMPLOYER_REJECTED = 'EMPLOYER_REJECTED'
        EMPLOYER_SUSPENDED = 'EMPLOYER_SUSPENDED'
        EMPLOYER_UNSUSPENDED = 'EMPLOYER_UNSUSPENDED'
        JOB_APPROVED = 'JOB_APPROVED'
        JOB_REJECTED = 'JOB_REJECTED'
        JOB_SUSPENDED = 'JOB_SUSPENDED'
        ANNOUNCEMENT_PUBLISHED = 'ANNOUNCEMENT_PUBLISHED'
        SUPPORT_RESPONDED = 'SUPPORT_RESPONDED'
        ESCALATION_RESPONDED = 'ESCALATION_RESPONDED'
        SETTINGS_UPDATED = 'SETTINGS_UPDATED'

    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='admin_logs'
    )
    action = models.CharField(max_length=50, choices=Action.choices)
    entity_type = models.CharField(max_length=50, blank=True)
    entity_id = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['entity_type', 'entity_id'], name='adminlog_entity_idx')]

    def __str__(self):
        return f"{self.admin} - {self.action} at {self.created_at}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValueError("AdminLog entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("AdminLog entries cannot be deleted")

    @classmethod
    def record(cls, admin, action, entity, description='', entity_type=None, **metadata):
        return cls.objects.create(
            admin=admin,
            action=action,
            entity_type=entity_type or entity.__class__.__name__.upper(),
            entity_id=str(entity.pk),
            description=description,
            metadata={k: v for k, v in metadata.items() if v is not None},
        )

    def as_api_dict(self):
        return {
            'id': self.pk,
            'type': self.action,
            'description': self.description,
            'timestamp': self.created_at.isoformat(),
            'user': self.admin.get_full_name() or self.admin.username,
            'entityType': self.entity_type,
            'entityId': self.entity_id,
        }
