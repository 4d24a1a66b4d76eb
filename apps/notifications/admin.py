from django.contrib import admin

from .models import Announcement, Notification, NotificationDelivery


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'type', 'is_read', 'created_at')
    list_filter = ('type', 'is_read')
    search_fields = ('title', 'message', 'user__username')
    readonly_fields = ('user', 'title', 'message', 'type', 'related_id', 'related_type', 'metadata', 'created_at')


@admin.register(NotificationDelivery)
class NotificationDeliveryAdmin(admin.ModelAdmin):
    list_display = ('event', 'channel', 'status', 'attempts', 'created_at', 'delivered_at')
    list_filter = ('status', 'event')
    search_fields = ('channel', 'last_error')
    readonly_fields = ('notification', 'payload', 'created_at', 'delivered_at')


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('title', 'type', 'status', 'created_by', 'published_at')
    list_filter = ('type', 'status')
    search_fields = ('title', 'content')
