import logging
from datetime import timedelta

from django.utils import timezone

from candidates.models import Application, Candidate
from config.constants import (
    ANALYTICS_DEFAULT_DAYS, ANALYTICS_MAX_DAYS, DASHBOARD_RECENT_ITEMS, MSG_SETTINGS_UPDATED,
)
from core.api import AdminApiView, api_response
from core.exceptions import ValidationError
from jobs.models import Job
from notifications.models import Notification
from support.models import AdminEscalation, SupportRequest, TicketStatus
from users.models import Employer, User
from .models import AdminLog, SystemSettings
from .monitor import SystemMonitor
from .security import decrypt_value, encrypt_value, mask_secret

logger = logging.getLogger('apps.core')


class DashboardView(AdminApiView):
    def get(self, request):
        open_statuses = [TicketStatus.OPEN, TicketStatus.IN_PROGRESS]
        stats = {
            'totalEmployers': Employer.objects.count(),
            'totalJobs': Job.objects.count(),
            'totalCandidates': User.objects.filter(role=User.Role.CANDIDATE, is_deleted=False).count(),
            'activeJobs': Job.objects.filter(status=Job.Status.APPROVED).count(),
            'pendingApprovals': Employer.objects.filter(
                verification_status=Employer.VerificationStatus.PENDING
            ).count(),
            'suspendedEmployers': Employer.objects.filter(is_suspended=True).count(),
            'pendingModerations': Job.objects.filter(status=Job.Status.PENDING).count(),
            'openSupportRequests': SupportRequest.objects.filter(status__in=open_statuses).count(),
            'openEscalations': AdminEscalation.objects.filter(status__in=open_statuses).count(),
            'unreadNotifications': Notification.objects.filter(user=request.user, is_read=False).count(),
        }
        recent = AdminLog.objects.select_related('admin')[:DASHBOARD_RECENT_ITEMS]
        return api_response({
            'stats': stats,
            'recentActivity': [entry.as_api_dict() for entry in recent],
        })


class AnalyticsView(AdminApiView):
    """
    GET /api/admin/analytics/?timeRange=<days>&metric=<name>
    Platform totals plus how many of each were created inside the window.
    """

    def get(self, request):
        time_range = request.GET.get('timeRange') or str(ANALYTICS_DEFAULT_DAYS)
        if not time_range.isdigit() or not 1 <= int(time_range) <= ANALYTICS_MAX_DAYS:
            raise ValidationError(f"timeRange must be a number of days between 1 and {ANALYTICS_MAX_DAYS}")
        days = int(time_range)
        since = timezone.now() - timedelta(days=days)
        live_jobs = [Job.Status.APPROVED, Job.Status.PENDING]

        return api_response({
            'totalEmployers': Employer.objects.filter(
                verification_status__in=[Employer.VerificationStatus.APPROVED, Employer.VerificationStatus.PENDING],
                is_suspended=False,
            ).count(),
            'totalCandidates': Candidate.objects.count(),
            'totalJobs': Job.objects.filter(status__in=live_jobs).count(),
            'totalApplications': Application.objects.count(),
            'newEmployers': Employer.objects.filter(created_at__gte=since).count(),
            'newCandidates': Candidate.objects.filter(created_at__gte=since).count(),
            'newJobs': Job.objects.filter(created_at__gte=since).count(),
            'newApplications': Application.objects.filter(applied_at__gte=since).count(),
            'timeRange': days,
            'metric': request.GET.get('metric') or 'overview',
        })


class SystemSettingsView(AdminApiView):
    """
    GET/PUT /api/admin/settings/
    The push secret is write-only: GET returns it masked, PUT with
    ``pusherSecret`` re-encrypts it, an empty string clears it.
    """
    FIELD_MAP = {
        'siteName': 'site_name',
        'contactEmail': 'contact_email',
        'pusherAppId': 'pusher_app_id',
        'pusherKey': 'pusher_key',
        'pusherCluster': 'pusher_cluster',
        'pushTimeoutSeconds': 'push_timeout_seconds',
    }

    def serialize(self, config):
        data = {key: getattr(config, attr) for key, attr in self.FIELD_MAP.items()}
        data.update({
            'pusherSecret': mask_secret(decrypt_value(config.encrypted_pusher_secret)),
            'pusherConfigured': config.has_pusher_credentials,
            'updatedAt': config.updated_at.isoformat() if config.updated_at else None,
        })
        return data

    def get(self, request):
        return api_response(self.serialize(SystemSettings.load()))

    def put(self, request):
        body = self.get_json_body()
        config = SystemSettings.objects.get_or_create(pk=1)[0]
        changed = []

        for key, attr in self.FIELD_MAP.items():
            if key not in body:
                continue
            value = body[key]
            if attr == 'push_timeout_seconds' and value is not None:
                if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                    raise ValidationError("pushTimeoutSeconds must be a positive integer")
            elif attr != 'push_timeout_seconds':
                value = str(value or '').strip()
            setattr(config, attr, value)
            changed.append(key)

        if 'pusherSecret' in body:
            config.encrypted_pusher_secret = encrypt_value(str(body['pusherSecret'] or '').strip())
            changed.append('pusherSecret')

        if not changed:
            raise ValidationError("No settings to update")
        if not config.site_name:
            raise ValidationError("siteName cannot be empty")

        config.save()
        AdminLog.record(
            request.user, AdminLog.Action.SETTINGS_UPDATED, config,
            description="Updated system settings", fields=changed,
        )
        logger.info(f"System settings updated by {request.user.username}: {', '.join(changed)}")
        return api_response(self.serialize(config), message=MSG_SETTINGS_UPDATED)


class HealthView(AdminApiView):
    def get(self, request):
        report = SystemMonitor().check_all()
        return api_response(report, status=200 if report['healthy'] else 503)
