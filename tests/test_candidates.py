from io import StringIO

import pytest
from django.core.management import call_command
from django.test import Client
from django.urls import reverse

from candidates.models import Application, Candidate
from messaging.models import Chat, Message

from conftest import make_job, make_user

pytestmark = pytest.mark.django_db


@pytest.fixture
def jane(db):
    user = make_user('jane', first_name='Jane', last_name='Doe')
    return Candidate.objects.create(
        user=user, bio='Data wrangler', skills=['Python', 'Pandas'], is_profile_complete=True,
    )


@pytest.fixture
def john(db):
    user = make_user('john', first_name='John', last_name='Roe')
    return Candidate.objects.create(user=user, bio='Frontend developer', skills=['React'])


@pytest.fixture
def application(jane, approved_job):
    return Application.objects.create(job=approved_job, candidate=jane, cover_letter='Pick me')


@pytest.fixture
def chat(application, approved_employer):
    chat = Chat.objects.create(application=application)
    chat.participants.add(application.candidate.user, approved_employer.user)
    for i in range(3):
        Message.objects.create(chat=chat, sender=application.candidate.user, content=f'Message {i}')
    return chat


def test_read_only_endpoints_require_admin(jane):
    client = Client()
    assert client.get(reverse('api-candidate-list')).status_code == 401

    client.force_login(jane.user)
    assert client.get(reverse('api-chat-list')).status_code == 403


def test_candidate_list_filters(admin_client, jane, john, application):
    response = admin_client.get(reverse('api-candidate-list'))
    body = response.json()
    assert response.status_code == 200
    assert body['pagination']['total'] == 2
    counts = {item['user']['firstName']: item['totalApplications'] for item in body['data']}
    assert counts == {'Jane': 1, 'John': 0}

    complete = admin_client.get(reverse('api-candidate-list'), {'isProfileComplete': 'true'}).json()['data']
    assert [item['id'] for item in complete] == [jane.pk]

    found = admin_client.get(reverse('api-candidate-list'), {'search': 'frontend'}).json()['data']
    assert [item['id'] for item in found] == [john.pk]


def test_candidate_detail_lists_applications(admin_client, jane, application):
    data = admin_client.get(reverse('api-candidate-detail', args=[jane.pk])).json()['data']
    assert data['skills'] == ['Python', 'Pandas']
    assert data['applications'][0]['id'] == application.pk
    assert data['applications'][0]['job']['title'] == application.job.title

    missing = admin_client.get(reverse('api-candidate-detail', args=[999999]))
    assert missing.status_code == 404
    assert missing.json() == {'error': 'Candidate not found'}


def test_application_list_filters(admin_client, jane, john, application, approved_employer):
    other_job = make_job(approved_employer, title='QA Engineer')
    Application.objects.create(job=other_job, candidate=john, status=Application.Status.REJECTED)

    all_items = admin_client.get(reverse('api-application-list')).json()
    assert all_items['pagination']['total'] == 2

    by_status = admin_client.get(reverse('api-application-list'), {'status': 'REJECTED'}).json()['data']
    assert [item['candidateId'] for item in by_status] == [john.pk]

    by_job = admin_client.get(reverse('api-application-list'), {'jobId': application.job_id}).json()['data']
    assert [item['id'] for item in by_job] == [application.pk]

    by_search = admin_client.get(reverse('api-application-list'), {'search': 'jane'}).json()['data']
    assert [item['id'] for item in by_search] == [application.pk]

    assert admin_client.get(reverse('api-application-list'), {'status': 'NOPE'}).status_code == 400
    assert admin_client.get(reverse('api-application-list'), {'jobId': 'abc'}).status_code == 400


def test_application_detail_includes_recent_chat(admin_client, application, chat):
    data = admin_client.get(reverse('api-application-detail', args=[application.pk])).json()['data']
    assert data['job']['employer']['companyName'] == application.job.employer.company_name
    assert data['candidate']['user']['firstName'] == 'Jane'
    assert data['chat']['id'] == chat.pk
    assert [m['content'] for m in data['chat']['messages']] == ['Message 0', 'Message 1', 'Message 2']

    assert admin_client.get(reverse('api-application-detail', args=[999999])).status_code == 404


def test_chat_list_and_search(admin_client, chat):
    body = admin_client.get(reverse('api-chat-list')).json()
    assert body['pagination']['total'] == 1
    assert body['data'][0]['totalMessages'] == 3
    assert body['data'][0]['application']['candidate']['user']['firstName'] == 'Jane'

    assert admin_client.get(reverse('api-chat-list'), {'search': 'nobody'}).json()['data'] == []
    by_app = admin_client.get(reverse('api-chat-list'), {'applicationId': chat.application_id}).json()['data']
    assert [item['id'] for item in by_app] == [chat.pk]


def test_chat_detail_pages_newest_first_and_shows_oldest_first(admin_client, chat):
    url = reverse('api-chat-detail', args=[chat.pk])

    first_page = admin_client.get(url, {'limit': 2}).json()['data']
    assert [m['content'] for m in first_page['messages']] == ['Message 1', 'Message 2']
    assert first_page['pagination'] == {'page': 1, 'limit': 2, 'total': 3, 'totalPages': 2}
    assert len(first_page['participants']) == 2

    second_page = admin_client.get(url, {'limit': 2, 'page': 2}).json()['data']
    assert [m['content'] for m in second_page['messages']] == ['Message 0']

    assert admin_client.get(reverse('api-chat-detail', args=[999999])).status_code == 404


def test_analytics_counts_and_time_range(admin_client, jane, john, application, employer):
    data = admin_client.get(reverse('api-analytics'), {'timeRange': '7'}).json()['data']
    assert data['totalCandidates'] == 2
    assert data['totalApplications'] == 1
    assert data['newApplications'] == 1
    # the approved employer owning the job plus the pending one
    assert data['totalEmployers'] == 2
    assert data['timeRange'] == 7
    assert data['metric'] == 'overview'

    assert admin_client.get(reverse('api-analytics'), {'timeRange': 'week'}).status_code == 400


def test_seed_data_creates_candidate_records(db):
    call_command('seed_data', stdout=StringIO())
    call_command('seed_data', stdout=StringIO())

    assert Candidate.objects.count() == 1
    assert Application.objects.count() == 1
    assert Message.objects.count() == 2
