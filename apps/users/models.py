from django.contrib.auth.models import AbstractUser
from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = 'ADMIN', _('Admin')
        EMPLOYER = 'EMPLOYER', _('Employer')
        CANDIDATE = 'CANDIDATE', _('Candidate')

    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', _('Active')
        PENDING = 'PENDING', _('Pending')
        INACTIVE = 'INACTIVE', _('Inactive')
        SUSPENDED = 'SUSPENDED', _('Suspended')

    role = models.CharField(
        max_length=50,
        choices=Role.choices,
        default=Role.CANDIDATE
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        help_text=_("Account status, kept in sync with employer moderation")
    )
    is_deleted = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        if not self.pk and self.is_superuser:
            self.role = self.Role.ADMIN
        return super().save(*args, **kwargs)

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    def as_api_dict(self):
        return {
            'id': self.pk,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'role': self.role,
        }


class Employer(models.Model):
    class VerificationStatus(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        APPROVED = 'APPROVED', _('Approved')
        REJECTED = 'REJECTED', _('Rejected')
        SUSPENDED = 'SUSPENDED', _('Suspended')
        CLOSED = 'CLOSED', _('Closed')

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='employer')
    company_name = models.CharField(max_length=200)
    company_description = models.TextField(blank=True)
    company_website = models.URLField(blank=True)
    industry = models.CharField(max_length=100, blank=True)
    company_size = models.CharField(max_length=20, blank=True)
    city = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)

    verification_status = models.CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING
    )
    verification_notes = models.TextField(blank=True, null=True)
    verified_at = models.DateTimeField(null=True, blank=True)
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='verified_employers'
    )

    # Suspension is orthogonal to verification_status
    is_suspended = models.BooleanField(default=False)
    suspension_reason = models.TextField(blank=True, null=True)
    suspended_at = models.DateTimeField(null=True, blank=True)
    suspended_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='suspended_employers'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.company_name

    @property
    def owner_id(self):
        return self.user_id

    def as_api_dict(self, detail=False):
        data = {
            'id': self.pk,
            'companyName': self.company_name,
            'industry': self.industry,
            'city': self.city,
            'country': self.country,
            'verificationStatus': self.verification_status,
            'verifiedAt': self.verified_at.isoformat() if self.verified_at else None,
            'isSuspended': self.is_suspended,
            'suspendedAt': self.suspended_at.isoformat() if self.suspended_at else None,
            'createdAt': self.created_at.isoformat(),
            'user': self.user.as_api_dict(),
        }
        if detail:
            data.update({
                'companyDescription': self.company_description,
                'companyWebsite': self.company_website,
                'companySize': self.company_size,
                'verificationNotes': self.verification_notes,
                'suspensionReason': self.suspension_reason,
                'totalJobs': self.jobs.count(),
            })
        return data
