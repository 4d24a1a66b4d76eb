from django.conf import settings
from django.contrib import admin
from django.urls import path, include

api_patterns = [
    path("", include("core.urls")),
    path("", include("moderation.urls")),
    path("", include("notifications.urls")),
    path("", include("support.urls")),
    path("", include("candidates.urls")),
    path("", include("messaging.urls")),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path("api/admin/", include(api_patterns)),
]

if settings.DEBUG:
    urlpatterns.append(path("__reload__/", include("django_browser_reload.urls")))
