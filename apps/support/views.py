from django.db.models import Q

from config.constants import MSG_SUPPORT_UPDATED
from core.api import AdminApiView, api_response, paginate
from core.exceptions import ValidationError
from .models import AdminEscalation, SupportRequest, TicketPriority, TicketStatus
from .services import SupportService


def filter_tickets(request, tickets):
    status = request.GET.get('status')
    if status:
        if status not in TicketStatus.values:
            raise ValidationError(f"Unknown status: {status}")
        tickets = tickets.filter(status=status)

    priority = request.GET.get('priority')
    if priority:
        if priority not in TicketPriority.values:
            raise ValidationError(f"Unknown priority: {priority}")
        tickets = tickets.filter(priority=priority)

    search = request.GET.get('search')
    if search:
        tickets = tickets.filter(
            Q(subject__icontains=search) | Q(message__icontains=search) | Q(user__email__icontains=search)
        )
    return tickets


class SupportRequestListView(AdminApiView):
    def get(self, request):
        tickets = filter_tickets(request, SupportRequest.objects.select_related('user'))
        items, pagination = paginate(request, tickets, SupportRequest.as_api_dict)
        return api_response(items, pagination=pagination)


class SupportRequestDetailView(AdminApiView):
    def get(self, request, pk):
        return api_response(SupportService().get_request(pk).as_api_dict())

    def put(self, request, pk):
        body = self.get_json_body()
        service = SupportService()
        ticket = service.get_request(pk)

        if body.get('adminResponse'):
            ticket, result = service.respond(
                ticket, request.user, body['adminResponse'],
                status=body.get('status'), priority=body.get('priority'),
            )
            warnings = result.warnings
        elif body.get('status') or body.get('priority'):
            ticket = service.update_request(ticket, request.user, status=body.get('status'),
                                            priority=body.get('priority'))
            warnings = []
        else:
            raise ValidationError("Nothing to update: send adminResponse, status or priority")

        return api_response(ticket.as_api_dict(), message=MSG_SUPPORT_UPDATED, warnings=warnings)


class EscalationListView(AdminApiView):
    def get(self, request):
        tickets = filter_tickets(request, AdminEscalation.objects.select_related('user'))
        items, pagination = paginate(request, tickets, AdminEscalation.as_api_dict)
        return api_response(items, pagination=pagination)


class EscalationRespondView(AdminApiView):
    def put(self, request, pk):
        body = self.get_json_body()
        service = SupportService()
        ticket, result = service.respond(
            service.get_escalation(pk), request.user, body.get('response') or body.get('adminResponse'),
            status=body.get('status'),
        )
        return api_response(ticket.as_api_dict(), message=MSG_SUPPORT_UPDATED, warnings=result.warnings)
