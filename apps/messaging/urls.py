from django.urls import path

from . import views

urlpatterns = [
    path('chats/', views.ChatListView.as_view(), name='api-chat-list'),
    path('chats/<int:pk>/', views.ChatDetailView.as_view(), name='api-chat-detail'),
]
