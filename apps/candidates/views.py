from django.db.models import Count, Q

from config.constants import MSG_CANDIDATE_NOT_FOUND, MSG_APPLICATION_NOT_FOUND
from core.api import AdminApiView, api_response, paginate, parse_bool
from core.exceptions import NotFoundError, ValidationError
from .models import Application, Candidate


def _id_param(request, name):
    value = request.GET.get(name)
    if not value:
        return None
    if not value.isdigit():
        raise ValidationError(f"{name} must be a number")
    return int(value)


# -------------------------------------------------------
# Candidates
# -------------------------------------------------------

class CandidateListView(AdminApiView):
    def get(self, request):
        candidates = Candidate.objects.select_related('user').annotate(
            total_applications=Count('applications')
        )

        is_complete = parse_bool(request.GET.get('isProfileComplete'))
        if is_complete is not None:
            candidates = candidates.filter(is_profile_complete=is_complete)

        search = request.GET.get('search')
        if search:
            candidates = candidates.filter(
                Q(user__first_name__icontains=search) |
                Q(user__last_name__icontains=search) |
                Q(user__email__icontains=search) |
                Q(skills__icontains=search) |
                Q(bio__icontains=search)
            )

        items, pagination = paginate(request, candidates, Candidate.as_api_dict)
        return api_response(items, pagination=pagination)


class CandidateDetailView(AdminApiView):
    def get(self, request, pk):
        try:
            candidate = Candidate.objects.select_related('user').get(pk=pk)
        except Candidate.DoesNotExist:
            raise NotFoundError(MSG_CANDIDATE_NOT_FOUND)
        return api_response(candidate.as_api_dict(detail=True))


# -------------------------------------------------------
# Applications
# -------------------------------------------------------

def application_queryset():
    return Application.objects.select_related(
        'job', 'job__employer', 'job__employer__user', 'candidate', 'candidate__user'
    )


class ApplicationListView(AdminApiView):
    def get(self, request):
        applications = application_queryset()

        status = request.GET.get('status')
        if status:
            if status not in Application.Status.values:
                raise ValidationError(f"Unknown application status: {status}")
            applications = applications.filter(status=status)

        job_id = _id_param(request, 'jobId')
        if job_id is not None:
            applications = applications.filter(job_id=job_id)

        candidate_id = _id_param(request, 'candidateId')
        if candidate_id is not None:
            applications = applications.filter(candidate_id=candidate_id)

        search = request.GET.get('search')
        if search:
            applications = applications.filter(
                Q(job__title__icontains=search) |
                Q(candidate__user__first_name__icontains=search) |
                Q(candidate__user__last_name__icontains=search) |
                Q(candidate__user__email__icontains=search) |
                Q(cover_letter__icontains=search)
            )

        items, pagination = paginate(request, applications, Application.as_api_dict)
        return api_response(items, pagination=pagination)


class ApplicationDetailView(AdminApiView):
    def get(self, request, pk):
        try:
            application = application_queryset().get(pk=pk)
        except Application.DoesNotExist:
            raise NotFoundError(MSG_APPLICATION_NOT_FOUND)
        return api_response(application.as_api_dict(detail=True))
