from django.db import models
from django.conf import settings
from candidates.models import Application


class Chat(models.Model):
    """Conversation between an employer and a candidate about one application."""
    application = models.OneToOneField(Application, on_delete=models.CASCADE, related_name='chat')
    participants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name='chats', blank=True)
    is_active = models.BooleanField(default=True)
    last_message_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Chat {self.id} - application {self.application_id}"

    class Meta:
        ordering = ['-last_message_at', '-created_at']

    def application_summary(self):
        application = self.application
        return {
            'id': application.pk,
            'status': application.status,
            'job': {
                'id': application.job_id,
                'title': application.job.title,
                'companyName': application.job.employer.company_name,
            },
            'candidate': {
                'id': application.candidate_id,
                'user': application.candidate.user.as_api_dict(),
            },
        }

    def as_api_dict(self, recent_messages=0):
        data = {
            'id': self.pk,
            'applicationId': self.application_id,
            'isActive': self.is_active,
            'lastMessageAt': self.last_message_at.isoformat() if self.last_message_at else None,
            'totalMessages': getattr(self, 'total_messages', None),
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
        if data['totalMessages'] is None:
            data['totalMessages'] = self.messages.count()
        if recent_messages:
            latest = self.messages.select_related('sender').order_by('-created_at', '-id')[:recent_messages]
            data['messages'] = [message.as_api_dict() for message in list(latest)[::-1]]
        return data


class Message(models.Model):
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Message from {self.sender.username} in Chat {self.chat_id}"

    class Meta:
        ordering = ['created_at']

    def as_api_dict(self):
        return {
            'id': self.pk,
            'content': self.content,
            'isRead': self.is_read,
            'createdAt': self.created_at.isoformat(),
            'sender': self.sender.as_api_dict(),
        }
