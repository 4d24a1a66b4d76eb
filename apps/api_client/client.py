"""
REST client for the admin JSON API.

Build one ``ApiClient`` at application start and hand it to whatever needs
it; there is no module-level instance. All methods return ``ApiResult[T]``
and never raise for HTTP or network failures.
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError as SchemaError
from pydantic.alias_generators import to_camel

from config.constants import (
    ANALYTICS_DEFAULT_DAYS, API_CLIENT_TIMEOUT_SECONDS, MSG_SESSION_EXPIRED, PAGINATION_CHAT_MESSAGES,
)
from .schemas import (
    Analytics, Announcement, ApiResult, Application, Candidate, Chat, Dashboard, Employer, Job,
    Notification, ReadAllResult, SupportTicket, SystemSettings,
)

logger = logging.getLogger('apps.api_client')

API_PREFIX = '/api/admin/'
CSRF_COOKIE = 'csrftoken'


class ApiClient:
    """
    ``on_session_expired(login_url)`` is called on any 401 after the session
    cookies are cleared; ``on_error(message, status_code)`` on every other
    failure (status_code is None for network errors).
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = API_CLIENT_TIMEOUT_SECONDS,
        on_session_expired: Optional[Callable[[str], Any]] = None,
        on_error: Optional[Callable[[str, Optional[int]], Any]] = None,
        current_path: Optional[str] = None,
        login_path: str = '/auth/login',
    ):
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.on_session_expired = on_session_expired
        self.on_error = on_error
        self.current_path = current_path
        self.login_path = login_path

    # -------------------------------------------------------
    # Transport
    # -------------------------------------------------------

    def request(self, method: str, endpoint: str, model: Any = Any,
                params: Optional[Dict[str, Any]] = None, json: Optional[Dict[str, Any]] = None) -> ApiResult:
        url = f"{self.base_url}{API_PREFIX}{endpoint.lstrip('/')}"
        headers = {'Accept': 'application/json'}
        if method != 'GET':
            csrf_token = self.session.cookies.get(CSRF_COOKIE)
            if csrf_token:
                headers['X-CSRFToken'] = csrf_token
            headers['Referer'] = self.base_url + '/'

        try:
            response = self.session.request(
                method, url,
                params=self._clean_params(params),
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            return self._fail(f"Network error: {exc}", None)

        if response.status_code == 401:
            return self._session_expired()

        body = self._json(response)
        if not 200 <= response.status_code < 300:
            return self._fail(self._error_message(response, body), response.status_code)
        if body is None:
            if response.status_code == 204:
                return ApiResult(status_code=204)
            return self._fail("Invalid JSON response from server", response.status_code)

        try:
            result = ApiResult[model].model_validate(body)
        except SchemaError as exc:
            logger.error(f"{method} {url} returned an unexpected payload: {exc}")
            return self._fail("Unexpected response format from server", response.status_code)
        result.status_code = response.status_code
        return result

    def _session_expired(self) -> ApiResult:
        self.session.cookies.clear()
        login_url = f"{self.login_path}?callbackUrl={quote(self.current_path or '/', safe='')}"
        if self.on_session_expired:
            self.on_session_expired(login_url)
        return ApiResult(error=MSG_SESSION_EXPIRED, status_code=401)

    def _fail(self, message: str, status_code: Optional[int]) -> ApiResult:
        if self.on_error:
            self.on_error(message, status_code)
        return ApiResult(error=message, status_code=status_code)

    @staticmethod
    def _json(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(response, body) -> str:
        if isinstance(body, dict):
            message = body.get('error') or body.get('message')
            if message:
                return str(message)
        return f"HTTP {response.status_code}: {response.reason}"

    @staticmethod
    def _clean_params(params):
        if not params:
            return None
        cleaned = {}
        for key, value in params.items():
            if value is None or value == '':
                continue
            cleaned[key] = str(value).lower() if isinstance(value, bool) else value
        return cleaned

    # -------------------------------------------------------
    # Employers
    # -------------------------------------------------------

    def list_employers(self, status=None, is_suspended=None, search=None, page=1, limit=10):
        return self.request('GET', 'employers/', List[Employer], params={
            'status': status, 'isSuspended': is_suspended, 'search': search, 'page': page, 'limit': limit,
        })

    def list_pending_employers(self, page=1, limit=10):
        return self.request('GET', 'employers/pending/', List[Employer], params={'page': page, 'limit': limit})

    def get_employer(self, employer_id):
        return self.request('GET', f'employers/{employer_id}/', Employer)

    def approve_employer(self, employer_id, notes=None):
        return self.request('PUT', f'employers/{employer_id}/approve/', Employer, json={'notes': notes})

    def reject_employer(self, employer_id, reason, notes=None):
        return self.request('PUT', f'employers/{employer_id}/reject/', Employer,
                            json={'reason': reason, 'notes': notes})

    def suspend_employer(self, employer_id, reason):
        return self.request('PUT', f'employers/{employer_id}/suspend/', Employer, json={'reason': reason})

    def unsuspend_employer(self, employer_id):
        return self.request('PUT', f'employers/{employer_id}/unsuspend/', Employer, json={})

    # -------------------------------------------------------
    # Jobs
    # -------------------------------------------------------

    def list_jobs(self, status=None, employer_id=None, search=None, page=1, limit=10):
        return self.request('GET', 'jobs/', List[Job], params={
            'status': status, 'employerId': employer_id, 'search': search, 'page': page, 'limit': limit,
        })

    def list_pending_jobs(self, page=1, limit=10):
        return self.request('GET', 'jobs/pending/', List[Job], params={'page': page, 'limit': limit})

    def get_job(self, job_id):
        return self.request('GET', f'jobs/{job_id}/', Job)

    def approve_job(self, job_id, notes=None):
        return self.request('PUT', f'jobs/{job_id}/approve/', Job, json={'notes': notes})

    def reject_job(self, job_id, reason, notes=None):
        return self.request('PUT', f'jobs/{job_id}/reject/', Job, json={'reason': reason, 'notes': notes})

    def suspend_job(self, job_id, reason):
        return self.request('PUT', f'jobs/{job_id}/suspend/', Job, json={'reason': reason})

    # -------------------------------------------------------
    # Candidates, applications & chats (read-only)
    # -------------------------------------------------------

    def list_candidates(self, is_profile_complete=None, search=None, page=1, limit=10):
        return self.request('GET', 'candidates/', List[Candidate], params={
            'isProfileComplete': is_profile_complete, 'search': search, 'page': page, 'limit': limit,
        })

    def get_candidate(self, candidate_id):
        return self.request('GET', f'candidates/{candidate_id}/', Candidate)

    def list_applications(self, status=None, job_id=None, candidate_id=None, search=None, page=1, limit=10):
        return self.request('GET', 'applications/', List[Application], params={
            'status': status, 'jobId': job_id, 'candidateId': candidate_id, 'search': search,
            'page': page, 'limit': limit,
        })

    def get_application(self, application_id):
        return self.request('GET', f'applications/{application_id}/', Application)

    def list_chats(self, application_id=None, search=None, page=1, limit=10):
        return self.request('GET', 'chats/', List[Chat], params={
            'applicationId': application_id, 'search': search, 'page': page, 'limit': limit,
        })

    def get_chat(self, chat_id, page=1, limit=PAGINATION_CHAT_MESSAGES):
        return self.request('GET', f'chats/{chat_id}/', Chat, params={'page': page, 'limit': limit})

    # -------------------------------------------------------
    # Notifications & announcements
    # -------------------------------------------------------

    def list_notifications(self, status=None, type=None, page=1, limit=20):
        return self.request('GET', 'notifications/', List[Notification], params={
            'status': status, 'type': type, 'page': page, 'limit': limit,
        })

    def mark_notification_read(self, notification_id):
        return self.request('PUT', f'notifications/{notification_id}/read/', Notification, json={})

    def mark_all_notifications_read(self):
        return self.request('PUT', 'notifications/read-all/', ReadAllResult, json={})

    def list_announcements(self, status=None, search=None, page=1, limit=10):
        return self.request('GET', 'announcements/', List[Announcement], params={
            'status': status, 'search': search, 'page': page, 'limit': limit,
        })

    def create_announcement(self, title, content, type='GENERAL', status='DRAFT'):
        return self.request('POST', 'announcements/', Announcement, json={
            'title': title, 'content': content, 'type': type, 'status': status,
        })

    def update_announcement(self, announcement_id, **fields):
        return self.request('PUT', f'announcements/{announcement_id}/', Announcement, json=fields)

    def delete_announcement(self, announcement_id):
        return self.request('DELETE', f'announcements/{announcement_id}/')

    # -------------------------------------------------------
    # Support & escalations
    # -------------------------------------------------------

    def list_support_requests(self, status=None, priority=None, search=None, page=1, limit=10):
        return self.request('GET', 'support/', List[SupportTicket], params={
            'status': status, 'priority': priority, 'search': search, 'page': page, 'limit': limit,
        })

    def get_support_request(self, request_id):
        return self.request('GET', f'support/{request_id}/', SupportTicket)

    def update_support_request(self, request_id, admin_response=None, status=None, priority=None):
        payload = {'adminResponse': admin_response, 'status': status, 'priority': priority}
        return self.request('PUT', f'support/{request_id}/', SupportTicket,
                            json={k: v for k, v in payload.items() if v is not None})

    def list_escalations(self, status=None, priority=None, search=None, page=1, limit=10):
        return self.request('GET', 'escalations/', List[SupportTicket], params={
            'status': status, 'priority': priority, 'search': search, 'page': page, 'limit': limit,
        })

    def respond_to_escalation(self, escalation_id, response, status=None):
        payload = {'response': response}
        if status:
            payload['status'] = status
        return self.request('PUT', f'escalations/{escalation_id}/respond/', SupportTicket, json=payload)

    # -------------------------------------------------------
    # Dashboard, settings, health
    # -------------------------------------------------------

    def get_dashboard(self):
        return self.request('GET', 'dashboard/', Dashboard)

    def get_analytics(self, time_range=ANALYTICS_DEFAULT_DAYS, metric=None):
        return self.request('GET', 'analytics/', Analytics, params={'timeRange': time_range, 'metric': metric})

    def get_settings(self):
        return self.request('GET', 'settings/', SystemSettings)

    def update_settings(self, **fields):
        """Keyword arguments use attribute names, e.g. ``pusher_key='...'``."""
        return self.request('PUT', 'settings/', SystemSettings,
                            json={to_camel(name): value for name, value in fields.items()})

    def get_health(self):
        return self.request('GET', 'health/', Dict[str, Any])
