from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from jobs.models import Job


class Candidate(models.Model):
    """Job-seeker profile attached to a CANDIDATE user."""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='candidate')
    cv_url = models.URLField(blank=True)
    bio = models.TextField(blank=True)
    skills = models.JSONField(default=list, blank=True)
    experience = models.TextField(blank=True)
    education = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    availability = models.CharField(max_length=100, blank=True)
    expected_salary = models.CharField(max_length=100, blank=True)
    is_profile_complete = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.user.display_name

    def as_api_dict(self, detail=False):
        user = self.user
        data = {
            'id': self.pk,
            'userId': self.user_id,
            'cvUrl': self.cv_url,
            'bio': self.bio,
            'skills': self.skills,
            'experience': self.experience,
            'education': self.education,
            'location': self.location,
            'availability': self.availability,
            'expectedSalary': self.expected_salary,
            'isProfileComplete': self.is_profile_complete,
            # annotated by the list queryset; detail falls back to a count query
            'totalApplications': getattr(self, 'total_applications', None),
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
            'user': dict(user.as_api_dict(), status=user.status, createdAt=user.date_joined.isoformat()),
        }
        if data['totalApplications'] is None:
            data['totalApplications'] = self.applications.count()
        if detail:
            data['applications'] = [
                {
                    'id': application.pk,
                    'status': application.status,
                    'appliedAt': application.applied_at.isoformat(),
                    'job': {
                        'id': application.job_id,
                        'title': application.job.title,
                        'companyName': application.job.employer.company_name,
                    },
                }
                for application in self.applications.select_related('job', 'job__employer')
            ]
        return data


class Application(models.Model):
    class Status(models.TextChoices):
        APPLIED = 'APPLIED', _('Applied')
        REVIEWING = 'REVIEWING', _('Reviewing')
        APPROVED = 'APPROVED', _('Approved')
        REJECTED = 'REJECTED', _('Rejected')
        INTERVIEW_SCHEDULED = 'INTERVIEW_SCHEDULED', _('Interview Scheduled')
        INTERVIEW_COMPLETED = 'INTERVIEW_COMPLETED', _('Interview Completed')
        OFFERED = 'OFFERED', _('Offered')
        ACCEPTED = 'ACCEPTED', _('Accepted')
        DECLINED = 'DECLINED', _('Declined')

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    candidate = models.ForeignKey(Candidate, on_delete=models.CASCADE, related_name='applications')
    status = models.CharField(max_length=30, choices=Status.choices, default=Status.APPLIED)
    cover_letter = models.TextField(blank=True)

    applied_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    interview_scheduled = models.BooleanField(default=False)
    interview_date = models.DateTimeField(null=True, blank=True)
    interview_location = models.CharField(max_length=200, blank=True)
    interview_notes = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-applied_at']
        unique_together = ('job', 'candidate')

    def __str__(self):
        return f"{self.candidate} applied to {self.job.title}"

    def as_api_dict(self, detail=False):
        job = self.job
        candidate_user = self.candidate.user
        data = {
            'id': self.pk,
            'jobId': self.job_id,
            'candidateId': self.candidate_id,
            'status': self.status,
            'coverLetter': self.cover_letter,
            'appliedAt': self.applied_at.isoformat(),
            'reviewedAt': self.reviewed_at.isoformat() if self.reviewed_at else None,
            'interviewScheduled': self.interview_scheduled,
            'interviewDate': self.interview_date.isoformat() if self.interview_date else None,
            'interviewLocation': self.interview_location,
            'interviewNotes': self.interview_notes,
            'rejectionReason': self.rejection_reason,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
            'job': {
                'id': job.pk,
                'title': job.title,
                'employer': {'id': job.employer_id, 'companyName': job.employer.company_name},
            },
            'candidate': {
                'id': self.candidate_id,
                'userId': candidate_user.pk,
                'user': candidate_user.as_api_dict(),
            },
        }
        if detail:
            data['job'] = job.as_api_dict(detail=True)
            data['candidate'] = self.candidate.as_api_dict()
            chat = getattr(self, 'chat', None)
            data['chat'] = chat.as_api_dict(recent_messages=10) if chat else None
        return data
