"""
Moderation workflow for employers and jobs.

Each transition:
  1. validates input (reason required for reject/suspend),
  2. reads the entity and checks the precondition,
  3. applies a compare-and-swap UPDATE guarded by that precondition,
     together with the AdminLog row, in one transaction,
  4. notifies the owner.

Step 4 runs after the commit. Its failure never rolls the decision back;
it is reported as a DeliveryDegraded warning on the result.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from django.db import transaction
from django.utils import timezone

from config.constants import (
    MSG_EMPLOYER_NOT_FOUND, MSG_JOB_NOT_FOUND,
    MSG_REJECTION_REASON_REQUIRED, MSG_SUSPENSION_REASON_REQUIRED,
    MSG_INVALID_TRANSITION, MSG_ALREADY_SUSPENDED, MSG_NOT_SUSPENDED,
    MSG_UNSUSPEND_UNSUPPORTED, MSG_MODERATION_CONFLICT, MSG_DELIVERY_DEGRADED, MSG_TEXT_FIELD_INVALID,
    REASON_MAX_LENGTH,
)
from core.exceptions import (
    ConflictError, DeliveryDegraded, InvalidStateError, NotFoundError, ValidationError,
)
from core.models import AdminLog
from jobs.models import Job
from notifications import templates
from notifications.services import NotificationService
from users.models import Employer, User

logger = logging.getLogger('apps.moderation')

EMPLOYER = 'employer'
JOB = 'job'
ENTITY_KINDS = (EMPLOYER, JOB)


@dataclass
class ModerationResult:
    entity: Any
    notification: Optional[Any] = None
    warnings: List[DeliveryDegraded] = field(default_factory=list)


def _clean_text(value, field_name):
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(MSG_TEXT_FIELD_INVALID.format(field=field_name))
    return value.strip()


def _require_reason(reason, message):
    reason = _clean_text(reason, 'Reason')
    if not reason:
        raise ValidationError(message)
    if len(reason) > REASON_MAX_LENGTH:
        raise ValidationError(f"Reason must be at most {REASON_MAX_LENGTH} characters")
    return reason


def _clean_notes(notes):
    return _clean_text(notes, 'Notes') or None


def _combine_notes(reason, notes):
    return f"{reason}\n\n{notes}" if notes else reason


def _sync_owner_status(employer_id):
    """
    Derive the owner's account status from the employer's current row:
    suspension wins, otherwise it follows verification.
    """
    verification_status, is_suspended, user_id = Employer.objects.filter(pk=employer_id).values_list(
        'verification_status', 'is_suspended', 'user_id'
    ).get()
    if is_suspended:
        status = User.Status.SUSPENDED
    elif verification_status == Employer.VerificationStatus.APPROVED:
        status = User.Status.ACTIVE
    elif verification_status == Employer.VerificationStatus.PENDING:
        status = User.Status.PENDING
    else:
        status = User.Status.INACTIVE
    User.objects.filter(pk=user_id).update(status=status)
    return status


class BaseModeration:
    model = None
    kind = None
    not_found_message = None

    def __init__(self, notifier=None):
        self.notifier = notifier or NotificationService()

    def get_entity(self, entity_id):
        try:
            return self.get_queryset().get(pk=entity_id)
        except (self.model.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(self.not_found_message)

    def get_queryset(self):
        return self.model.objects.all()

    def approve(self, entity_id, admin, notes=None):
        raise NotImplementedError

    def reject(self, entity_id, admin, reason, notes=None):
        raise NotImplementedError

    def suspend(self, entity_id, admin, reason):
        raise NotImplementedError

    def unsuspend(self, entity_id, admin):
        raise InvalidStateError(MSG_UNSUSPEND_UNSUPPORTED)

    def _compare_and_swap(self, entity, guard, changes):
        """UPDATE ... WHERE pk=? AND <guard>; ConflictError if another admin got there first."""
        updated = self.model.objects.filter(pk=entity.pk, **guard).update(
            updated_at=timezone.now(), **changes
        )
        if updated != 1:
            logger.warning(f"Moderation conflict on {self.kind} {entity.pk}: guard {guard} no longer holds")
            raise ConflictError(MSG_MODERATION_CONFLICT.format(entity=self.kind.capitalize()))

    def _invalid(self, action, status):
        return InvalidStateError(MSG_INVALID_TRANSITION.format(action=action, entity=self.kind, status=status))

    def _notify_owner(self, entity, template):
        """Best-effort owner notification; any failure becomes a warning."""
        try:
            result = self.notifier.notify_user(entity.owner_id, **template)
        except Exception as exc:
            logger.exception(f"Notification for {self.kind} {entity.pk} failed after commit")
            return None, [DeliveryDegraded(f"{MSG_DELIVERY_DEGRADED} ({type(exc).__name__})", user_id=entity.owner_id)]
        notification = result.notifications[0] if result.notifications else None
        return notification, list(result.warnings)

    def _finish(self, entity, template):
        entity.refresh_from_db()
        notification, warnings = self._notify_owner(entity, template)
        return ModerationResult(entity=entity, notification=notification, warnings=warnings)


class EmployerModeration(BaseModeration):
    model = Employer
    kind = EMPLOYER
    not_found_message = MSG_EMPLOYER_NOT_FOUND

    def get_queryset(self):
        return Employer.objects.select_related('user')

    def approve(self, entity_id, admin, notes=None):
        notes = _clean_notes(notes)
        employer = self.get_entity(entity_id)
        pending = Employer.VerificationStatus.PENDING
        if employer.verification_status != pending:
            raise self._invalid('approve', employer.verification_status)

        with transaction.atomic():
            self._compare_and_swap(employer, {'verification_status': pending}, {
                'verification_status': Employer.VerificationStatus.APPROVED,
                'verification_notes': notes,
                'verified_at': timezone.now(),
                'verified_by': admin,
            })
            _sync_owner_status(employer.pk)
            AdminLog.record(
                admin, AdminLog.Action.EMPLOYER_APPROVED, employer,
                description=f"Approved employer: {employer.company_name}", notes=notes,
            )

        logger.info(f"✅ Employer approved: {employer.company_name} (id={employer.pk}) by {admin.username}")
        return self._finish(employer, templates.employer_approved(employer.company_name, employer.pk))

    def reject(self, entity_id, admin, reason, notes=None):
        reason = _require_reason(reason, MSG_REJECTION_REASON_REQUIRED)
        notes = _clean_notes(notes)
        employer = self.get_entity(entity_id)
        pending = Employer.VerificationStatus.PENDING
        if employer.verification_status != pending:
            raise self._invalid('reject', employer.verification_status)

        with transaction.atomic():
            self._compare_and_swap(employer, {'verification_status': pending}, {
                'verification_status': Employer.VerificationStatus.REJECTED,
                'verification_notes': _combine_notes(reason, notes),
                'verified_at': timezone.now(),
                'verified_by': admin,
            })
            _sync_owner_status(employer.pk)
            AdminLog.record(
                admin, AdminLog.Action.EMPLOYER_REJECTED, employer,
                description=f"Rejected employer: {employer.company_name}", reason=reason, notes=notes,
            )

        logger.info(f"❌ Employer rejected: {employer.company_name} (id={employer.pk}) by {admin.username}")
        return self._finish(employer, templates.employer_rejected(employer.company_name, employer.pk, reason))

    def suspend(self, entity_id, admin, reason):
        reason = _require_reason(reason, MSG_SUSPENSION_REASON_REQUIRED)
        employer = self.get_entity(entity_id)
        if employer.is_suspended:
            raise InvalidStateError(MSG_ALREADY_SUSPENDED)

        with transaction.atomic():
            self._compare_and_swap(employer, {'is_suspended': False}, {
                'is_suspended': True,
                'suspension_reason': reason,
                'suspended_at': timezone.now(),
                'suspended_by': admin,
            })
            _sync_owner_status(employer.pk)
            suspended_jobs = self._suspend_jobs(employer, admin)
            AdminLog.record(
                admin, AdminLog.Action.EMPLOYER_SUSPENDED, employer,
                description=f"Suspended employer: {employer.company_name}",
                reason=reason, suspended_jobs=suspended_jobs,
            )

        logger.info(
            f"⛔ Employer suspended: {employer.company_name} (id={employer.pk}) by {admin.username}; "
            f"{suspended_jobs} jobs suspended"
        )
        return self._finish(employer, templates.employer_suspended(employer.company_name, employer.pk, reason))

    @staticmethod
    def _suspend_jobs(employer, admin):
        """Suspend the employer's live and queued jobs; queued ones leave PENDING here, so stamp them."""
        now = timezone.now()
        jobs = Job.objects.filter(employer=employer)
        count = jobs.filter(status=Job.Status.APPROVED).update(status=Job.Status.SUSPENDED, updated_at=now)
        count += jobs.filter(status=Job.Status.PENDING).update(
            status=Job.Status.SUSPENDED, moderated_at=now, moderated_by=admin, updated_at=now,
        )
        return count

    def unsuspend(self, entity_id, admin):
        employer = self.get_entity(entity_id)
        if not employer.is_suspended:
            raise InvalidStateError(MSG_NOT_SUSPENDED)

        with transaction.atomic():
            self._compare_and_swap(employer, {'is_suspended': True}, {
                'is_suspended': False,
                'suspension_reason': None,
                'suspended_at': None,
                'suspended_by': None,
            })
            _sync_owner_status(employer.pk)
            AdminLog.record(
                admin, AdminLog.Action.EMPLOYER_UNSUSPENDED, employer,
                description=f"Unsuspended employer: {employer.company_name}",
            )

        logger.info(f"♻️  Employer unsuspended: {employer.company_name} (id={employer.pk}) by {admin.username}")
        return self._finish(employer, templates.employer_unsuspended(employer.company_name, employer.pk))


class JobModeration(BaseModeration):
    model = Job
    kind = JOB
    not_found_message = MSG_JOB_NOT_FOUND

    def get_queryset(self):
        return Job.objects.select_related('employer', 'employer__user')

    def approve(self, entity_id, admin, notes=None):
        notes = _clean_notes(notes)
        job = self.get_entity(entity_id)
        if job.status != Job.Status.PENDING:
            raise self._invalid('approve', job.status)

        with transaction.atomic():
            self._compare_and_swap(job, {'status': Job.Status.PENDING}, {
                'status': Job.Status.APPROVED,
                'moderation_notes': notes,
                'moderated_at': timezone.now(),
                'moderated_by': admin,
            })
            AdminLog.record(
                admin, AdminLog.Action.JOB_APPROVED, job,
                description=f"Approved job: {job.title}", notes=notes,
            )

        logger.info(f"✅ Job approved: '{job.title}' (id={job.pk}) by {admin.username}")
        return self._finish(job, templates.job_approved(job.title, job.pk))

    def reject(self, entity_id, admin, reason, notes=None):
        reason = _require_reason(reason, MSG_REJECTION_REASON_REQUIRED)
        notes = _clean_notes(notes)
        job = self.get_entity(entity_id)
        if job.status != Job.Status.PENDING:
            raise self._invalid('reject', job.status)

        with transaction.atomic():
            self._compare_and_swap(job, {'status': Job.Status.PENDING}, {
                'status': Job.Status.REJECTED,
                'moderation_notes': _combine_notes(reason, notes),
                'moderated_at': timezone.now(),
                'moderated_by': admin,
            })
            AdminLog.record(
                admin, AdminLog.Action.JOB_REJECTED, job,
                description=f"Rejected job: {job.title}", reason=reason, notes=notes,
            )

        logger.info(f"❌ Job rejected: '{job.title}' (id={job.pk}) by {admin.username}")
        return self._finish(job, templates.job_rejected(job.title, job.pk, reason))

    def suspend(self, entity_id, admin, reason):
        reason = _require_reason(reason, MSG_SUSPENSION_REASON_REQUIRED)
        job = self.get_entity(entity_id)
        if job.status != Job.Status.APPROVED:
            raise self._invalid('suspend', job.status)

        # moderated_at is already set (the job left PENDING when it was approved)
        with transaction.atomic():
            self._compare_and_swap(job, {'status': Job.Status.APPROVED}, {
                'status': Job.Status.SUSPENDED,
                'moderation_notes': reason,
                'moderated_by': admin,
            })
            AdminLog.record(
                admin, AdminLog.Action.JOB_SUSPENDED, job,
                description=f"Suspended job: {job.title}", reason=reason,
            )

        logger.info(f"⛔ Job suspended: '{job.title}' (id={job.pk}) by {admin.username}")
        return self._finish(job, templates.job_suspended(job.title, job.pk, reason))


class ModerationService:
    """Entry point used by the API layer: ``moderation.approve('job', 12, admin, notes=...)``."""

    def __init__(self, notifier=None):
        notifier = notifier or NotificationService()
        self.workflows = {
            EMPLOYER: EmployerModeration(notifier),
            JOB: JobModeration(notifier),
        }

    def for_kind(self, kind):
        try:
            return self.workflows[kind]
        except KeyError:
            raise NotFoundError(f"Unknown entity kind: {kind}")

    def approve(self, kind, entity_id, admin, notes=None):
        return self.for_kind(kind).approve(entity_id, admin, notes=notes)

    def reject(self, kind, entity_id, admin, reason=None, notes=None):
        return self.for_kind(kind).reject(entity_id, admin, reason, notes=notes)

    def suspend(self, kind, entity_id, admin, reason=None):
        return self.for_kind(kind).suspend(entity_id, admin, reason)

    def unsuspend(self, kind, entity_id, admin):
        return self.for_kind(kind).unsuspend(entity_id, admin)
