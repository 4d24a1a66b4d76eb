from django.urls import path
from .views import AnalyticsView, DashboardView, SystemSettingsView, HealthView

urlpatterns = [
    path('dashboard/', DashboardView.as_view(), name='api-dashboard'),
    path('analytics/', AnalyticsView.as_view(), name='api-analytics'),
    path('settings/', SystemSettingsView.as_view(), name='api-settings'),
    path('health/', HealthView.as_view(), name='api-health'),
]
