from django.urls import path

from . import views

urlpatterns = [
    path('support/', views.SupportRequestListView.as_view(), name='api-support-list'),
    path('support/<int:pk>/', views.SupportRequestDetailView.as_view(), name='api-support-detail'),
    path('escalations/', views.EscalationListView.as_view(), name='api-escalation-list'),
    path('escalations/<int:pk>/respond/', views.EscalationRespondView.as_view(), name='api-escalation-respond'),
]
