from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, Employer


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'status', 'is_deleted', 'is_staff')
    list_filter = ('role', 'status', 'is_deleted', 'is_staff')
    fieldsets = UserAdmin.fieldsets + (
        ('Portal', {'fields': ('role', 'status', 'is_deleted')}),
    )


@admin.register(Employer)
class EmployerAdmin(admin.ModelAdmin):
    list_display = ('company_name', 'user', 'verification_status', 'is_suspended', 'verified_at', 'created_at')
    list_filter = ('verification_status', 'is_suspended', 'industry')
    search_fields = ('company_name', 'user__email', 'user__username')
    readonly_fields = ('verified_at', 'verified_by', 'suspended_at', 'suspended_by')
