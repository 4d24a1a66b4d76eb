from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from users.models import Employer


class Job(models.Model):
    class EmploymentType(models.TextChoices):
        FULL_TIME = 'FULL_TIME', _('Full Time')
        PART_TIME = 'PART_TIME', _('Part Time')
        CONTRACT = 'CONTRACT', _('Contract')
        INTERNSHIP = 'INTERNSHIP', _('Internship')

    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        APPROVED = 'APPROVED', _('Approved')
        REJECTED = 'REJECTED', _('Rejected')
        SUSPENDED = 'SUSPENDED', _('Suspended')
        CLOSED = 'CLOSED', _('Closed')

    employer = models.ForeignKey(Employer, on_delete=models.CASCADE, related_name='jobs')
    title = models.CharField(max_length=200)
    description = models.TextField()
    requirements = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    salary_range = models.CharField(max_length=100, blank=True)
    category = models.CharField(max_length=100, blank=True)
    employment_type = models.CharField(
        max_length=20,
        choices=EmploymentType.choices,
        default=EmploymentType.FULL_TIME
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )
    moderation_notes = models.TextField(blank=True, null=True)
    moderated_at = models.DateTimeField(null=True, blank=True)
    moderated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='moderated_jobs'
    )

    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        ordering = ['-created_at']

    @property
    def owner_id(self):
        return self.employer.user_id

    def as_api_dict(self, detail=False):
        data = {
            'id': self.pk,
            'employerId': self.employer_id,
            'companyName': self.employer.company_name,
            'title': self.title,
            'location': self.location,
            'employmentType': self.employment_type,
            'category': self.category,
            'status': self.status,
            'moderatedAt': self.moderated_at.isoformat() if self.moderated_at else None,
            'expiresAt': self.expires_at.isoformat() if self.expires_at else None,
            'createdAt': self.created_at.isoformat(),
        }
        if detail:
            data.update({
                'description': self.description,
                'requirements': self.requirements,
                'salaryRange': self.salary_range,
                'moderationNotes': self.moderation_notes,
                'updatedAt': self.updated_at.isoformat(),
                'employer': {
                    'id': self.employer_id,
                    'companyName': self.employer.company_name,
                    'verificationStatus': self.employer.verification_status,
                    'isSuspended': self.employer.is_suspended,
                    'user': self.employer.user.as_api_dict(),
                },
            })
        return data
