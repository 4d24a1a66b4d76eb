import json

import pytest
import requests

from api_client import ApiClient
from api_client.schemas import Employer
from config.constants import MSG_SESSION_EXPIRED

EMPLOYER_PAYLOAD = {
    'id': 7,
    'companyName': 'Acme Corp',
    'industry': 'Technology',
    'city': 'Austin',
    'country': 'USA',
    'verificationStatus': 'APPROVED',
    'verifiedAt': '2024-05-01T10:00:00+00:00',
    'isSuspended': False,
    'suspendedAt': None,
    'createdAt': '2024-04-30T09:00:00+00:00',
    'user': {'id': 3, 'firstName': 'Wile', 'lastName': 'Coyote', 'email': 'wile@acme.test', 'role': 'EMPLOYER'},
}


def make_response(status, body=None, reason='OK'):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if body is None:
        response._content = b''
    else:
        response._content = json.dumps(body).encode()
        response.headers['Content-Type'] = 'application/json'
    return response


class FakeSession:
    def __init__(self, *responses, error=None):
        self.cookies = requests.cookies.RequestsCookieJar()
        self.responses = list(responses)
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def test_list_decodes_typed_items_and_pagination():
    session = FakeSession(make_response(200, {
        'data': [EMPLOYER_PAYLOAD],
        'pagination': {'page': 1, 'limit': 10, 'total': 1, 'totalPages': 1},
    }))
    client = ApiClient('http://portal.test/', session=session)

    result = client.list_employers(status='APPROVED', is_suspended=False)

    assert result.ok
    assert isinstance(result.data[0], Employer)
    assert result.data[0].company_name == 'Acme Corp'
    assert result.data[0].user.first_name == 'Wile'
    assert result.pagination.total_pages == 1

    call = session.calls[0]
    assert call['url'] == 'http://portal.test/api/admin/employers/'
    assert call['params'] == {'status': 'APPROVED', 'isSuspended': 'false', 'page': 1, 'limit': 10}


def test_unauthorized_clears_session_and_redirects_to_login():
    session = FakeSession(make_response(401, {'error': 'Authentication required'}, reason='Unauthorized'))
    session.cookies.set('sessionid', 'abc')
    redirects = []
    client = ApiClient('http://portal.test', session=session, on_session_expired=redirects.append,
                       current_path='/admin/employers/pending')

    result = client.get_dashboard()

    assert not result.ok
    assert result.error == MSG_SESSION_EXPIRED
    assert len(session.cookies) == 0
    assert redirects == ['/auth/login?callbackUrl=%2Fadmin%2Femployers%2Fpending']


def test_server_error_message_is_surfaced():
    errors = []
    session = FakeSession(make_response(409, {'error': 'Cannot approve employer with status APPROVED'},
                                        reason='Conflict'))
    client = ApiClient('http://portal.test', session=session, on_error=lambda msg, code: errors.append((msg, code)))

    result = client.approve_employer(7, notes='again')

    assert result.error == 'Cannot approve employer with status APPROVED'
    assert result.status_code == 409
    assert errors == [('Cannot approve employer with status APPROVED', 409)]
    assert session.calls[0]['json'] == {'notes': 'again'}


def test_error_without_body_falls_back_to_status_line():
    client = ApiClient('http://portal.test', session=FakeSession(
        make_response(502, reason='Bad Gateway')
    ))
    assert client.get_job(1).error == 'HTTP 502: Bad Gateway'


def test_network_failure_becomes_error_result():
    client = ApiClient('http://portal.test', session=FakeSession(error=requests.ConnectionError('refused')))

    result = client.list_jobs()

    assert not result.ok
    assert result.error.startswith('Network error')
    assert result.status_code is None


def test_unexpected_payload_is_an_error_not_an_exception():
    client = ApiClient('http://portal.test', session=FakeSession(make_response(200, {'data': [{'id': 'x'}]})))
    result = client.list_employers()
    assert not result.ok
    assert result.data is None


def test_writes_send_csrf_token_and_warnings_come_through():
    session = FakeSession(make_response(200, {
        'data': {'count': 4}, 'message': 'All notifications marked as read', 'warnings': [],
    }))
    session.cookies.set('csrftoken', 'tok123')
    client = ApiClient('http://portal.test', session=session)

    result = client.mark_all_notifications_read()

    assert result.data.count == 4
    assert result.message == 'All notifications marked as read'
    assert session.calls[0]['method'] == 'PUT'
    assert session.calls[0]['headers']['X-CSRFToken'] == 'tok123'


def test_update_settings_sends_camel_case_keys():
    session = FakeSession(make_response(200, {'data': {'siteName': 'Portal', 'pusherKey': 'k'}}))
    client = ApiClient('http://portal.test', session=session)

    result = client.update_settings(pusher_key='k', push_timeout_seconds=3)

    assert result.data.pusher_key == 'k'
    assert session.calls[0]['json'] == {'pusherKey': 'k', 'pushTimeoutSeconds': 3}


@pytest.mark.parametrize('kwargs, expected', [
    ({}, {'page': 1, 'limit': 10}),
    ({'search': ''}, {'page': 1, 'limit': 10}),
    ({'status': 'PENDING', 'employer_id': 5}, {'status': 'PENDING', 'employerId': 5, 'page': 1, 'limit': 10}),
])
def test_empty_query_params_are_dropped(kwargs, expected):
    session = FakeSession(make_response(200, {'data': []}))
    ApiClient('http://portal.test', session=session).list_jobs(**kwargs)
    assert session.calls[0]['params'] == expected


def test_chat_detail_decodes_messages_and_inner_pagination():
    user = EMPLOYER_PAYLOAD['user']
    session = FakeSession(make_response(200, {'data': {
        'id': 4,
        'applicationId': 9,
        'isActive': True,
        'lastMessageAt': None,
        'totalMessages': 1,
        'createdAt': '2024-05-02T09:00:00+00:00',
        'updatedAt': '2024-05-02T09:00:00+00:00',
        'participants': [user],
        'messages': [{'id': 1, 'content': 'Hello', 'isRead': False,
                      'createdAt': '2024-05-02T09:01:00+00:00', 'sender': user}],
        'pagination': {'page': 1, 'limit': 50, 'total': 1, 'totalPages': 1},
    }}))

    result = ApiClient('http://portal.test', session=session).get_chat(4)

    assert result.ok
    assert result.data.messages[0].sender.first_name == 'Wile'
    assert result.data.pagination.total == 1
    assert session.calls[0]['url'] == 'http://portal.test/api/admin/chats/4/'
    assert session.calls[0]['params'] == {'page': 1, 'limit': 50}


def test_analytics_defaults_to_thirty_days():
    session = FakeSession(make_response(200, {'data': {'totalCandidates': 3, 'timeRange': 30}}))

    result = ApiClient('http://portal.test', session=session).get_analytics()

    assert result.data.total_candidates == 3
    assert result.data.metric == 'overview'
    assert session.calls[0]['params'] == {'timeRange': 30}
