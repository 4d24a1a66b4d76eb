import json

import pytest
from django.urls import reverse

from core.exceptions import ValidationError
from core.models import AdminLog
from notifications.models import Notification, NotificationType
from support.models import AdminEscalation, SupportRequest, TicketPriority, TicketStatus
from support.services import SupportService

pytestmark = pytest.mark.django_db


@pytest.fixture
def support(notifier):
    return SupportService(notifier)


def test_opening_a_request_notifies_admins(support, admin_user, candidate):
    ticket, result = support.open_request(candidate, 'Cannot log in', 'Password reset link is broken',
                                          priority=TicketPriority.HIGH)

    assert ticket.status == TicketStatus.OPEN
    notification = Notification.objects.get(user=admin_user)
    assert notification.type == NotificationType.NEW_SUPPORT_REQUEST
    assert notification.related_id == str(ticket.pk)
    assert result.notifications == [notification]


def test_opening_requires_subject_and_message(support, candidate):
    with pytest.raises(ValidationError):
        support.open_request(candidate, '  ', 'body')


def test_respond_moves_open_ticket_to_in_progress(support, admin_user, candidate):
    ticket, _ = support.open_request(candidate, 'Billing question', 'Why was I charged twice?')

    ticket, result = support.respond(ticket, admin_user, 'Refund issued.')

    ticket.refresh_from_db()
    assert ticket.status == TicketStatus.IN_PROGRESS
    assert ticket.admin_response == 'Refund issued.'
    assert ticket.responded_by == admin_user
    assert ticket.responded_at is not None

    reply = Notification.objects.get(user=candidate)
    assert reply.type == NotificationType.SYSTEM_ALERT
    assert reply.related_type == 'support_request'
    assert AdminLog.objects.get().action == AdminLog.Action.SUPPORT_RESPONDED


def test_respond_with_explicit_status(support, admin_user, candidate):
    ticket, _ = support.open_request(candidate, 'Bug', 'Button broken')
    ticket, _ = support.respond(ticket, admin_user, 'Fixed in release 2.3', status=TicketStatus.RESOLVED)
    assert ticket.status == TicketStatus.RESOLVED


def test_respond_requires_text(support, admin_user, candidate):
    ticket, _ = support.open_request(candidate, 'Bug', 'Button broken')
    with pytest.raises(ValidationError):
        support.respond(ticket, admin_user, '')
    ticket.refresh_from_db()
    assert ticket.admin_response is None


def test_support_api(admin_client, support, candidate):
    ticket, _ = support.open_request(candidate, 'Account locked', 'Please help', priority=TicketPriority.URGENT)
    support.open_request(candidate, 'Feature idea', 'Dark mode', priority=TicketPriority.LOW)

    response = admin_client.get(reverse('api-support-list'), {'priority': 'URGENT'})
    assert [t['id'] for t in response.json()['data']] == [ticket.pk]

    response = admin_client.put(
        reverse('api-support-detail', args=[ticket.pk]),
        data=json.dumps({'adminResponse': 'Unlocked', 'status': 'RESOLVED'}),
        content_type='application/json',
    )
    assert response.status_code == 200
    assert response.json()['data']['status'] == 'RESOLVED'
    assert SupportRequest.objects.get(pk=ticket.pk).admin_response == 'Unlocked'

    response = admin_client.get(reverse('api-support-detail', args=[999999]))
    assert response.status_code == 404


def test_escalation_respond_api(admin_client, support, admin_user, employer):
    escalation, _ = support.open_escalation(
        employer.user, 'Wrongful rejection', 'Please review', related_id=str(employer.pk), related_type='employer'
    )

    response = admin_client.put(
        reverse('api-escalation-respond', args=[escalation.pk]),
        data=json.dumps({'response': 'Reviewing now'}),
        content_type='application/json',
    )

    assert response.status_code == 200
    assert response.json()['data']['status'] == 'IN_PROGRESS'
    assert AdminEscalation.objects.get().responded_by == admin_user
    assert Notification.objects.filter(user=employer.user, related_type='escalation').count() == 1
    assert AdminLog.objects.get().action == AdminLog.Action.ESCALATION_RESPONDED
