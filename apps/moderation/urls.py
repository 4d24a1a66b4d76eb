from django.urls import path

from . import views
from .services import EMPLOYER, JOB

urlpatterns = [
    # Employers
    path('employers/', views.EmployerListView.as_view(), name='api-employer-list'),
    path('employers/pending/', views.PendingEmployerListView.as_view(), name='api-employer-pending'),
    path('employers/<int:pk>/', views.EmployerDetailView.as_view(), name='api-employer-detail'),
    path('employers/<int:pk>/approve/', views.ModerationActionView.as_view(kind=EMPLOYER, action='approve'),
         name='api-employer-approve'),
    path('employers/<int:pk>/reject/', views.ModerationActionView.as_view(kind=EMPLOYER, action='reject'),
         name='api-employer-reject'),
    path('employers/<int:pk>/suspend/', views.ModerationActionView.as_view(kind=EMPLOYER, action='suspend'),
         name='api-employer-suspend'),
    path('employers/<int:pk>/unsuspend/', views.ModerationActionView.as_view(kind=EMPLOYER, action='unsuspend'),
         name='api-employer-unsuspend'),

    # Jobs
    path('jobs/', views.JobListView.as_view(), name='api-job-list'),
    path('jobs/pending/', views.PendingJobListView.as_view(), name='api-job-pending'),
    path('jobs/<int:pk>/', views.JobDetailView.as_view(), name='api-job-detail'),
    path('jobs/<int:pk>/approve/', views.ModerationActionView.as_view(kind=JOB, action='approve'),
         name='api-job-approve'),
    path('jobs/<int:pk>/reject/', views.ModerationActionView.as_view(kind=JOB, action='reject'),
         name='api-job-reject'),
    path('jobs/<int:pk>/suspend/', views.ModerationActionView.as_view(kind=JOB, action='suspend'),
         name='api-job-suspend'),
]
