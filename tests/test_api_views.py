import json

import pytest
from django.test import Client
from django.urls import reverse

from config.constants import MSG_REJECTION_REASON_REQUIRED, MSG_UNAUTHORIZED
from core.models import AdminLog, SystemSettings
from core.security import decrypt_value
from jobs.models import Job
from notifications.models import Announcement, Notification, NotificationType
from users.models import Employer

from conftest import make_employer, make_job, make_user

pytestmark = pytest.mark.django_db


def put(client, url, body=None):
    return client.put(url, data=json.dumps(body or {}), content_type='application/json')


def test_anonymous_requests_get_401(employer):
    response = Client().get(reverse('api-employer-list'))
    assert response.status_code == 401
    assert response.json() == {'error': MSG_UNAUTHORIZED}


def test_non_admins_get_403(employer):
    client = Client()
    client.force_login(employer.user)
    response = put(client, reverse('api-employer-approve', args=[employer.pk]))
    assert response.status_code == 403
    employer.refresh_from_db()
    assert employer.verification_status == Employer.VerificationStatus.PENDING


def test_employer_list_filters_and_paginates(admin_client, employer, approved_employer):
    make_employer('third', 'Initech')

    response = admin_client.get(reverse('api-employer-list'), {'limit': 2})
    body = response.json()
    assert response.status_code == 200
    assert len(body['data']) == 2
    assert body['pagination'] == {'page': 1, 'limit': 2, 'total': 3, 'totalPages': 2}

    response = admin_client.get(reverse('api-employer-list'), {'status': 'APPROVED'})
    assert [e['companyName'] for e in response.json()['data']] == ['Globex']

    response = admin_client.get(reverse('api-employer-list'), {'search': 'acme'})
    assert [e['id'] for e in response.json()['data']] == [employer.pk]


def test_pending_employers(admin_client, employer, approved_employer):
    response = admin_client.get(reverse('api-employer-pending'))
    assert [e['id'] for e in response.json()['data']] == [employer.pk]


def test_employer_detail_and_missing(admin_client, approved_employer, approved_job):
    response = admin_client.get(reverse('api-employer-detail', args=[approved_employer.pk]))
    assert response.json()['data']['totalJobs'] == 1

    response = admin_client.get(reverse('api-employer-detail', args=[999999]))
    assert response.status_code == 404
    assert 'error' in response.json()


def test_approve_employer_endpoint(admin_client, employer):
    response = put(admin_client, reverse('api-employer-approve', args=[employer.pk]), {'notes': 'welcome'})

    body = response.json()
    assert response.status_code == 200
    assert body['data']['verificationStatus'] == 'APPROVED'
    assert body['data']['verificationNotes'] == 'welcome'
    assert 'message' in body
    assert 'warnings' not in body
    assert Notification.objects.get(user=employer.user).type == NotificationType.EMPLOYER_APPROVED

    second = put(admin_client, reverse('api-employer-approve', args=[employer.pk]))
    assert second.status_code == 409


def test_reject_job_without_reason_is_400(admin_client, pending_job):
    response = put(admin_client, reverse('api-job-reject', args=[pending_job.pk]), {'reason': ''})

    assert response.status_code == 400
    assert response.json() == {'error': MSG_REJECTION_REASON_REQUIRED}
    pending_job.refresh_from_db()
    assert pending_job.status == Job.Status.PENDING
    assert Notification.objects.count() == 0


def test_suspend_job_endpoint(admin_client, approved_job):
    response = put(admin_client, reverse('api-job-suspend', args=[approved_job.pk]), {'reason': 'policy violation'})

    assert response.status_code == 200
    assert response.json()['data']['status'] == 'SUSPENDED'
    assert response.json()['data']['moderationNotes'] == 'policy violation'


def test_unsuspend_employer_endpoint(admin_client, approved_employer):
    put(admin_client, reverse('api-employer-suspend', args=[approved_employer.pk]), {'reason': 'Spam'})
    response = put(admin_client, reverse('api-employer-unsuspend', args=[approved_employer.pk]))

    assert response.status_code == 200
    assert response.json()['data']['isSuspended'] is False
    assert response.json()['data']['suspensionReason'] is None


def test_push_failure_is_reported_as_warning(admin_client, pending_job, publisher):
    publisher.fail = True

    response = put(admin_client, reverse('api-job-approve', args=[pending_job.pk]))

    assert response.status_code == 200
    assert response.json()['data']['status'] == 'APPROVED'
    assert len(response.json()['warnings']) == 1


def test_malformed_json_is_400(admin_client, pending_job):
    response = admin_client.put(
        reverse('api-job-approve', args=[pending_job.pk]), data='{not json', content_type='application/json'
    )
    assert response.status_code == 400


def test_job_list_filters(admin_client, approved_employer, pending_job, approved_job):
    other = make_employer('other_owner', 'Other Co', status=Employer.VerificationStatus.APPROVED)
    make_job(other, title='Elsewhere')

    response = admin_client.get(reverse('api-job-list'), {'status': 'PENDING', 'employerId': approved_employer.pk})
    assert [j['id'] for j in response.json()['data']] == [pending_job.pk]

    response = admin_client.get(reverse('api-job-pending'))
    assert response.json()['pagination']['total'] == 2

    response = admin_client.get(reverse('api-job-list'), {'status': 'BOGUS'})
    assert response.status_code == 400


def test_notification_endpoints(admin_client, admin_user, notifier, candidate):
    for i in range(3):
        notifier.notify_user(admin_user.pk, f'N{i}', 'Body', NotificationType.SYSTEM_ALERT)
    theirs = notifier.notify_user(candidate.pk, 'Not yours', 'Body', NotificationType.SYSTEM_ALERT).notifications[0]
    mine = Notification.objects.filter(user=admin_user).first()

    response = admin_client.get(reverse('api-notification-list'))
    assert response.json()['pagination']['total'] == 3

    response = put(admin_client, reverse('api-notification-read', args=[mine.pk]))
    assert response.json()['data']['isRead'] is True

    response = put(admin_client, reverse('api-notification-read', args=[theirs.pk]))
    assert response.status_code == 403

    response = admin_client.get(reverse('api-notification-list'), {'status': 'unread'})
    assert response.json()['pagination']['total'] == 2

    response = put(admin_client, reverse('api-notification-read-all'))
    assert response.json()['data'] == {'count': 2}


def test_publishing_an_announcement_broadcasts_once(admin_client, admin_user, candidate, publisher):
    response = admin_client.post(
        reverse('api-announcement-list'),
        data=json.dumps({'title': 'Maintenance', 'content': 'Down at 2am'}),
        content_type='application/json',
    )
    assert response.status_code == 201
    announcement_id = response.json()['data']['id']
    assert response.json()['data']['status'] == 'DRAFT'
    assert Notification.objects.count() == 0

    url = reverse('api-announcement-detail', args=[announcement_id])
    response = put(admin_client, url, {'status': 'PUBLISHED'})
    assert response.status_code == 200
    assert response.json()['data']['publishedAt'] is not None
    assert Notification.objects.filter(type=NotificationType.ANNOUNCEMENT).count() == 2

    put(admin_client, url, {'title': 'Maintenance (updated)'})
    assert Notification.objects.count() == 2
    assert AdminLog.objects.filter(action=AdminLog.Action.ANNOUNCEMENT_PUBLISHED).count() == 1
    assert Announcement.objects.get().title == 'Maintenance (updated)'

    response = admin_client.delete(url)
    assert response.status_code == 200
    assert not Announcement.objects.exists()


def test_announcement_validation(admin_client):
    response = admin_client.post(
        reverse('api-announcement-list'), data=json.dumps({'title': '', 'content': 'x'}),
        content_type='application/json',
    )
    assert response.status_code == 400


def test_settings_mask_secret_and_audit(admin_client, admin_user):
    response = put(admin_client, reverse('api-settings'), {
        'pusherAppId': '12345', 'pusherKey': 'key-abc', 'pusherSecret': 'super-secret-value',
        'pusherCluster': 'eu',
    })
    assert response.status_code == 200
    data = response.json()['data']
    assert data['pusherSecret'] == 'supe…alue'
    assert data['pusherConfigured'] is True

    config = SystemSettings.load()
    assert decrypt_value(config.encrypted_pusher_secret) == 'super-secret-value'
    assert AdminLog.objects.get().action == AdminLog.Action.SETTINGS_UPDATED

    response = admin_client.get(reverse('api-settings'))
    assert 'super-secret-value' not in response.content.decode()


def test_dashboard_counts(admin_client, admin_user, employer, pending_job, approved_job):
    make_user('cand', role='CANDIDATE')

    response = admin_client.get(reverse('api-dashboard'))
    stats = response.json()['data']['stats']
    assert stats['totalEmployers'] == 2
    assert stats['pendingApprovals'] == 1
    assert stats['totalJobs'] == 2
    assert stats['pendingModerations'] == 1
    assert stats['activeJobs'] == 1
    assert stats['totalCandidates'] == 1
    assert response.json()['data']['recentActivity'] == []


def test_health_endpoint(admin_client):
    response = admin_client.get(reverse('api-health'))
    data = response.json()['data']
    assert data['database']['status'] == 'Operational'
    assert 'pending' in data['outbox']
