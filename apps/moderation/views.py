from django.db.models import Q

from config.constants import (
    MSG_EMPLOYER_NOT_FOUND, MSG_JOB_NOT_FOUND,
    MSG_EMPLOYER_APPROVED, MSG_EMPLOYER_REJECTED, MSG_EMPLOYER_SUSPENDED, MSG_EMPLOYER_UNSUSPENDED,
    MSG_JOB_APPROVED, MSG_JOB_REJECTED, MSG_JOB_SUSPENDED,
)
from core.api import AdminApiView, api_response, paginate, parse_bool
from core.exceptions import NotFoundError, ValidationError
from jobs.models import Job
from users.models import Employer
from .services import EMPLOYER, JOB, ModerationService


# -------------------------------------------------------
# Employers
# -------------------------------------------------------

def employer_queryset():
    return Employer.objects.select_related('user')


class EmployerListView(AdminApiView):
    def get(self, request):
        employers = employer_queryset()

        status = request.GET.get('status')
        if status:
            if status not in Employer.VerificationStatus.values:
                raise ValidationError(f"Unknown verification status: {status}")
            employers = employers.filter(verification_status=status)

        is_suspended = parse_bool(request.GET.get('isSuspended'))
        if is_suspended is not None:
            employers = employers.filter(is_suspended=is_suspended)

        search = request.GET.get('search')
        if search:
            employers = employers.filter(
                Q(company_name__icontains=search) |
                Q(user__email__icontains=search) |
                Q(user__first_name__icontains=search) |
                Q(user__last_name__icontains=search)
            )

        items, pagination = paginate(request, employers, Employer.as_api_dict)
        return api_response(items, pagination=pagination)


class PendingEmployerListView(AdminApiView):
    def get(self, request):
        employers = employer_queryset().filter(
            verification_status=Employer.VerificationStatus.PENDING
        ).order_by('created_at')
        items, pagination = paginate(request, employers, Employer.as_api_dict)
        return api_response(items, pagination=pagination)


class EmployerDetailView(AdminApiView):
    def get(self, request, pk):
        try:
            employer = employer_queryset().get(pk=pk)
        except Employer.DoesNotExist:
            raise NotFoundError(MSG_EMPLOYER_NOT_FOUND)
        return api_response(employer.as_api_dict(detail=True))


# -------------------------------------------------------
# Jobs
# -------------------------------------------------------

def job_queryset():
    return Job.objects.select_related('employer', 'employer__user')


class JobListView(AdminApiView):
    def get(self, request):
        jobs = job_queryset()

        status = request.GET.get('status')
        if status:
            if status not in Job.Status.values:
                raise ValidationError(f"Unknown job status: {status}")
            jobs = jobs.filter(status=status)

        employer_id = request.GET.get('employerId')
        if employer_id:
            if not employer_id.isdigit():
                raise ValidationError("employerId must be a number")
            jobs = jobs.filter(employer_id=int(employer_id))

        search = request.GET.get('search')
        if search:
            jobs = jobs.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search) |
                Q(employer__company_name__icontains=search)
            )

        items, pagination = paginate(request, jobs, Job.as_api_dict)
        return api_response(items, pagination=pagination)


class PendingJobListView(AdminApiView):
    def get(self, request):
        jobs = job_queryset().filter(status=Job.Status.PENDING).order_by('created_at')
        items, pagination = paginate(request, jobs, Job.as_api_dict)
        return api_response(items, pagination=pagination)


class JobDetailView(AdminApiView):
    def get(self, request, pk):
        try:
            job = job_queryset().get(pk=pk)
        except Job.DoesNotExist:
            raise NotFoundError(MSG_JOB_NOT_FOUND)
        return api_response(job.as_api_dict(detail=True))


# -------------------------------------------------------
# Moderation actions (PUT)
# -------------------------------------------------------

class ModerationActionView(AdminApiView):
    """
    PUT /api/admin/<kind>s/<id>/<action>/
    Body: ``{"notes": ...}`` for approve, ``{"reason": ..., "notes": ...}`` for reject,
    ``{"reason": ...}`` for suspend, nothing for unsuspend.
    """
    kind = None
    action = None
    success_messages = {
        (EMPLOYER, 'approve'): MSG_EMPLOYER_APPROVED,
        (EMPLOYER, 'reject'): MSG_EMPLOYER_REJECTED,
        (EMPLOYER, 'suspend'): MSG_EMPLOYER_SUSPENDED,
        (EMPLOYER, 'unsuspend'): MSG_EMPLOYER_UNSUSPENDED,
        (JOB, 'approve'): MSG_JOB_APPROVED,
        (JOB, 'reject'): MSG_JOB_REJECTED,
        (JOB, 'suspend'): MSG_JOB_SUSPENDED,
    }

    def put(self, request, pk):
        body = self.get_json_body()
        service = ModerationService()

        if self.action == 'approve':
            result = service.approve(self.kind, pk, request.user, notes=body.get('notes'))
        elif self.action == 'reject':
            result = service.reject(self.kind, pk, request.user, reason=body.get('reason'), notes=body.get('notes'))
        elif self.action == 'suspend':
            result = service.suspend(self.kind, pk, request.user, reason=body.get('reason'))
        else:
            result = service.unsuspend(self.kind, pk, request.user)

        return api_response(
            result.entity.as_api_dict(detail=True),
            message=self.success_messages.get((self.kind, self.action)),
            warnings=result.warnings,
        )
