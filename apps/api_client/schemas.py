"""Typed payloads for the /api/admin/ JSON API.

Every response is decoded into ``ApiResult[T]`` at the client boundary;
wire keys are camelCase, attributes are snake_case.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar('T')


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class Pagination(ApiModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0


class ApiResult(BaseModel, Generic[T]):
    """Either ``data`` (plus optional pagination/message/warnings) or ``error``."""

    data: Optional[T] = None
    error: Optional[str] = None
    pagination: Optional[Pagination] = None
    message: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class UserSummary(ApiModel):
    id: int
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    role: str


class Employer(ApiModel):
    id: int
    company_name: str
    industry: str = ''
    city: str = ''
    country: str = ''
    verification_status: str
    verified_at: Optional[datetime] = None
    is_suspended: bool = False
    suspended_at: Optional[datetime] = None
    created_at: datetime
    user: UserSummary
    # detail only
    company_description: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[str] = None
    verification_notes: Optional[str] = None
    suspension_reason: Optional[str] = None
    total_jobs: Optional[int] = None


class JobEmployer(ApiModel):
    id: int
    company_name: str
    verification_status: str
    is_suspended: bool = False
    user: UserSummary


class Job(ApiModel):
    id: int
    employer_id: int
    company_name: str
    title: str
    location: str = ''
    employment_type: str
    category: str = ''
    status: str
    moderated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    # detail only
    description: Optional[str] = None
    requirements: Optional[str] = None
    salary_range: Optional[str] = None
    moderation_notes: Optional[str] = None
    updated_at: Optional[datetime] = None
    employer: Optional[JobEmployer] = None


class Notification(ApiModel):
    id: int
    title: str
    message: str
    type: str
    is_read: bool = False
    related_id: Optional[str] = None
    related_type: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime


class ReadAllResult(ApiModel):
    count: int


class Announcement(ApiModel):
    id: int
    title: str
    content: str
    type: str
    status: str
    created_by: int
    created_by_name: str = ''
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SupportTicket(ApiModel):
    """Support request or admin escalation."""

    id: int
    subject: str
    message: str
    status: str
    priority: str
    admin_response: Optional[str] = None
    responded_at: Optional[datetime] = None
    responded_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary
    category: Optional[str] = None
    related_id: Optional[str] = None
    related_type: Optional[str] = None


class DashboardStats(ApiModel):
    total_employers: int = 0
    total_jobs: int = 0
    total_candidates: int = 0
    active_jobs: int = 0
    pending_approvals: int = 0
    suspended_employers: int = 0
    pending_moderations: int = 0
    open_support_requests: int = 0
    open_escalations: int = 0
    unread_notifications: int = 0


class ActivityEntry(ApiModel):
    id: int
    type: str
    description: str = ''
    timestamp: datetime
    user: str
    entity_type: str = ''
    entity_id: str = ''


class Dashboard(ApiModel):
    stats: DashboardStats
    recent_activity: List[ActivityEntry] = Field(default_factory=list)


class SystemSettings(ApiModel):
    site_name: str
    contact_email: str = ''
    pusher_app_id: str = ''
    pusher_key: str = ''
    pusher_cluster: str = ''
    push_timeout_seconds: Optional[int] = None
    pusher_secret: str = ''
    pusher_configured: bool = False
    updated_at: Optional[datetime] = None


class CandidateUser(UserSummary):
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class JobRef(ApiModel):
    id: int
    title: str
    company_name: Optional[str] = None


class CandidateApplication(ApiModel):
    id: int
    status: str
    applied_at: datetime
    job: JobRef


class Candidate(ApiModel):
    id: int
    user_id: int
    cv_url: str = ''
    bio: str = ''
    skills: List[str] = Field(default_factory=list)
    experience: str = ''
    education: str = ''
    location: str = ''
    availability: str = ''
    expected_salary: str = ''
    is_profile_complete: bool = False
    total_applications: int = 0
    created_at: datetime
    updated_at: datetime
    user: CandidateUser
    # detail only
    applications: Optional[List[CandidateApplication]] = None


class EmployerRef(ApiModel):
    id: int
    company_name: str


class ApplicationJob(ApiModel):
    id: int
    title: str
    employer: Optional[EmployerRef] = None


class ApplicationCandidate(ApiModel):
    id: int
    user_id: int
    user: CandidateUser


class ChatMessage(ApiModel):
    id: int
    content: str
    is_read: bool = False
    created_at: datetime
    sender: UserSummary


class ChatCandidate(ApiModel):
    id: int
    user: UserSummary


class ChatApplication(ApiModel):
    id: int
    status: str
    job: JobRef
    candidate: ChatCandidate


class Chat(ApiModel):
    id: int
    application_id: int
    is_active: bool = True
    last_message_at: Optional[datetime] = None
    total_messages: int = 0
    created_at: datetime
    updated_at: datetime
    application: Optional[ChatApplication] = None
    # detail only
    participants: Optional[List[UserSummary]] = None
    messages: Optional[List[ChatMessage]] = None
    pagination: Optional[Pagination] = None


class Application(ApiModel):
    id: int
    job_id: int
    candidate_id: int
    status: str
    cover_letter: str = ''
    applied_at: datetime
    reviewed_at: Optional[datetime] = None
    interview_scheduled: bool = False
    interview_date: Optional[datetime] = None
    interview_location: str = ''
    interview_notes: str = ''
    rejection_reason: str = ''
    created_at: datetime
    updated_at: datetime
    job: ApplicationJob
    candidate: ApplicationCandidate
    # detail only
    chat: Optional[Chat] = None


class Analytics(ApiModel):
    total_employers: int = 0
    total_candidates: int = 0
    total_jobs: int = 0
    total_applications: int = 0
    new_employers: int = 0
    new_candidates: int = 0
    new_jobs: int = 0
    new_applications: int = 0
    time_range: int
    metric: str = 'overview'
