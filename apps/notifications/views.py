import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from config.constants import (
    PAGINATION_NOTIFICATIONS,
    MSG_NOTIFICATIONS_READ_ALL, MSG_ANNOUNCEMENT_NOT_FOUND, MSG_ANNOUNCEMENT_DELETED,
    MSG_ANNOUNCEMENT_NO_FIELDS,
)
from core.api import AdminApiView, api_response, paginate
from core.exceptions import NotFoundError, ValidationError
from core.models import AdminLog
from .forms import AnnouncementForm, AnnouncementUpdateForm, form_error_message
from .models import Announcement, Notification, NotificationType
from .services import NotificationService

logger = logging.getLogger('apps.notifications')


class NotificationListView(AdminApiView):
    """The signed-in admin's own notifications, newest first."""

    def get(self, request):
        notifications = Notification.objects.filter(user=request.user)

        status = request.GET.get('status')
        if status == 'read':
            notifications = notifications.filter(is_read=True)
        elif status == 'unread':
            notifications = notifications.filter(is_read=False)

        notification_type = request.GET.get('type')
        if notification_type:
            if notification_type not in NotificationType.values:
                raise ValidationError(f"Unknown notification type: {notification_type}")
            notifications = notifications.filter(type=notification_type)

        items, pagination = paginate(
            request, notifications, Notification.as_api_dict, default_limit=PAGINATION_NOTIFICATIONS
        )
        return api_response(items, pagination=pagination)


class NotificationReadView(AdminApiView):
    def put(self, request, pk):
        notification = NotificationService().mark_read(pk, request.user.pk)
        return api_response(notification.as_api_dict())


class NotificationReadAllView(AdminApiView):
    def put(self, request):
        count = NotificationService().mark_all_read(request.user.pk)
        return api_response({'count': count}, message=MSG_NOTIFICATIONS_READ_ALL)


class AnnouncementMixin:
    def get_announcement(self, pk):
        try:
            return Announcement.objects.select_related('created_by').get(pk=pk)
        except Announcement.DoesNotExist:
            raise NotFoundError(MSG_ANNOUNCEMENT_NOT_FOUND)

    def publish(self, announcement):
        """
        Stamp published_at, audit, and broadcast. Called only on the
        transition into PUBLISHED, so each announcement is broadcast once.
        """
        Announcement.objects.filter(pk=announcement.pk).update(published_at=timezone.now())
        announcement.refresh_from_db()
        AdminLog.record(
            self.request.user, AdminLog.Action.ANNOUNCEMENT_PUBLISHED, announcement,
            description=f"Published announcement: {announcement.title}",
        )
        result = NotificationService().broadcast_announcement(
            announcement.pk, announcement.title, announcement.content, announcement.type
        )
        logger.info(
            f"Announcement {announcement.pk} published: {len(result.notifications)} notifications, "
            f"{len(result.warnings)} degraded"
        )
        return result.warnings


class AnnouncementListCreateView(AnnouncementMixin, AdminApiView):
    def get(self, request):
        announcements = Announcement.objects.select_related('created_by')
        status = request.GET.get('status')
        if status:
            announcements = announcements.filter(status=status)
        search = request.GET.get('search')
        if search:
            announcements = announcements.filter(Q(title__icontains=search) | Q(content__icontains=search))
        items, pagination = paginate(request, announcements, Announcement.as_api_dict)
        return api_response(items, pagination=pagination)

    def post(self, request):
        form = AnnouncementForm(self.get_json_body())
        if not form.is_valid():
            raise ValidationError(form_error_message(form))

        announcement = form.save(commit=False)
        announcement.created_by = request.user
        announcement.save()

        warnings = []
        if announcement.status == Announcement.Status.PUBLISHED:
            warnings = self.publish(announcement)
        return api_response(announcement.as_api_dict(), warnings=warnings, status=201)


class AnnouncementDetailView(AnnouncementMixin, AdminApiView):
    def get(self, request, pk):
        return api_response(self.get_announcement(pk).as_api_dict())

    def put(self, request, pk):
        body = self.get_json_body()
        editable = {k: v for k, v in body.items() if k in AnnouncementForm.Meta.fields}
        if not editable:
            raise ValidationError(MSG_ANNOUNCEMENT_NO_FIELDS)

        with transaction.atomic():
            try:
                announcement = Announcement.objects.select_for_update().get(pk=pk)
            except Announcement.DoesNotExist:
                raise NotFoundError(MSG_ANNOUNCEMENT_NOT_FOUND)
            was_published = announcement.status == Announcement.Status.PUBLISHED

            form = AnnouncementUpdateForm(editable, instance=announcement)
            if not form.is_valid():
                raise ValidationError(form_error_message(form))
            announcement = form.save()

        warnings = []
        if announcement.status == Announcement.Status.PUBLISHED and not was_published:
            warnings = self.publish(announcement)
        return api_response(self.get_announcement(pk).as_api_dict(), warnings=warnings)

    def delete(self, request, pk):
        announcement = self.get_announcement(pk)
        announcement.delete()
        logger.info(f"Announcement {pk} deleted by {request.user.username}")
        return api_response(None, message=MSG_ANNOUNCEMENT_DELETED)
