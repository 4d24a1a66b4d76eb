from django.contrib import admin
from .models import Job

@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'employer', 'location', 'status', 'moderated_at', 'created_at')
    list_filter = ('status', 'employment_type', 'created_at')
    search_fields = ('title', 'employer__company_name', 'description')
    readonly_fields = ('moderated_at', 'moderated_by')
    date_hierarchy = 'created_at'
