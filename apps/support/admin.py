from django.contrib import admin

from .models import AdminEscalation, SupportRequest


@admin.register(SupportRequest)
class SupportRequestAdmin(admin.ModelAdmin):
    list_display = ('subject', 'user', 'category', 'status', 'priority', 'created_at')
    list_filter = ('status', 'priority', 'category')
    search_fields = ('subject', 'message', 'user__email')


@admin.register(AdminEscalation)
class AdminEscalationAdmin(admin.ModelAdmin):
    list_display = ('subject', 'user', 'status', 'priority', 'related_type', 'created_at')
    list_filter = ('status', 'priority')
    search_fields = ('subject', 'message')
