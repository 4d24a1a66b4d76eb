from django.urls import path

from . import views

urlpatterns = [
    path('candidates/', views.CandidateListView.as_view(), name='api-candidate-list'),
    path('candidates/<int:pk>/', views.CandidateDetailView.as_view(), name='api-candidate-detail'),
    path('applications/', views.ApplicationListView.as_view(), name='api-application-list'),
    path('applications/<int:pk>/', views.ApplicationDetailView.as_view(), name='api-application-detail'),
]
