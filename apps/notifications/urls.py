from django.urls import path

from . import views

urlpatterns = [
    path('notifications/', views.NotificationListView.as_view(), name='api-notification-list'),
    path('notifications/read-all/', views.NotificationReadAllView.as_view(), name='api-notification-read-all'),
    path('notifications/<int:pk>/read/', views.NotificationReadView.as_view(), name='api-notification-read'),

    path('announcements/', views.AnnouncementListCreateView.as_view(), name='api-announcement-list'),
    path('announcements/<int:pk>/', views.AnnouncementDetailView.as_view(), name='api-announcement-detail'),
]
