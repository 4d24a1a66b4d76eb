from django.db.models import Count, Q

from config.constants import MSG_CHAT_NOT_FOUND, PAGINATION_CHAT_MESSAGES
from core.api import AdminApiView, api_response, paginate
from core.exceptions import NotFoundError, ValidationError
from .models import Chat, Message


def chat_queryset():
    return Chat.objects.select_related(
        'application', 'application__job', 'application__job__employer',
        'application__candidate', 'application__candidate__user',
    )


def chat_summary(chat):
    data = chat.as_api_dict()
    data['application'] = chat.application_summary()
    return data


class ChatListView(AdminApiView):
    def get(self, request):
        chats = chat_queryset().annotate(total_messages=Count('messages'))

        application_id = (request.GET.get('applicationId') or '').strip()
        if application_id:
            if not application_id.isdigit():
                raise ValidationError("applicationId must be a number")
            chats = chats.filter(application_id=int(application_id))

        search = (request.GET.get('search') or '').strip()
        if search:
            chats = chats.filter(
                Q(application__job__title__icontains=search) |
                Q(application__candidate__user__first_name__icontains=search) |
                Q(application__candidate__user__last_name__icontains=search) |
                Q(application__job__employer__company_name__icontains=search)
            )

        items, pagination = paginate(request, chats, chat_summary)
        return api_response(items, pagination=pagination)


class ChatDetailView(AdminApiView):
    """Chat history for moderation: newest page first, messages oldest-first within the page."""

    def get(self, request, pk):
        try:
            chat = chat_queryset().get(pk=pk)
        except Chat.DoesNotExist:
            raise NotFoundError(MSG_CHAT_NOT_FOUND)

        messages = Message.objects.filter(chat=chat).select_related('sender').order_by('-created_at', '-id')
        items, pagination = paginate(request, messages, Message.as_api_dict, default_limit=PAGINATION_CHAT_MESSAGES)

        data = chat_summary(chat)
        data.update({
            'participants': [user.as_api_dict() for user in chat.participants.all()],
            'messages': items[::-1],
            'pagination': pagination,
        })
        return api_response(data)
