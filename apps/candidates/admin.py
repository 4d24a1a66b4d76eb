from django.contrib import admin

from .models import Application, Candidate


@admin.register(Candidate)
class CandidateAdmin(admin.ModelAdmin):
    list_display = ('user', 'location', 'is_profile_complete', 'created_at')
    list_filter = ('is_profile_complete',)
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'bio')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('job', 'candidate', 'status', 'applied_at')
    list_filter = ('status', 'interview_scheduled')
    search_fields = ('job__title', 'candidate__user__email')
    date_hierarchy = 'applied_at'
