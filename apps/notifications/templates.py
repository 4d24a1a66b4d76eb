"""
Notification templates for common actions.

Each helper returns the keyword arguments for NotificationService.notify_*:
title, message, type and, where it applies, related_id/related_type/metadata.
"""

from .models import NotificationType


# --- Employers ---

def employer_registered(company_name, employer_id):
    return {
        'title': 'New Employer Registration',
        'message': f'Employer "{company_name}" has registered and is pending approval.',
        'type': NotificationType.NEW_EMPLOYER_REGISTRATION,
        'related_id': str(employer_id),
        'related_type': 'employer',
        'metadata': {'companyName': company_name},
    }


def employer_approved(company_name, employer_id):
    return {
        'title': 'Employer Approved',
        'message': f'Your company "{company_name}" has been approved. You can now post jobs.',
        'type': NotificationType.EMPLOYER_APPROVED,
        'related_id': str(employer_id),
        'related_type': 'employer',
    }


def employer_rejected(company_name, employer_id, reason):
    return {
        'title': 'Employer Registration Rejected',
        'message': f'Your company "{company_name}" registration was rejected. Reason: {reason}',
        'type': NotificationType.EMPLOYER_REJECTED,
        'related_id': str(employer_id),
        'related_type': 'employer',
        'metadata': {'reason': reason},
    }


def employer_suspended(company_name, employer_id, reason):
    return {
        'title': 'Employer Account Suspended',
        'message': f'Your company "{company_name}" account has been suspended. Reason: {reason}',
        'type': NotificationType.EMPLOYER_SUSPENDED,
        'related_id': str(employer_id),
        'related_type': 'employer',
        'metadata': {'reason': reason},
    }


def employer_unsuspended(company_name, employer_id):
    return {
        'title': 'Employer Account Reinstated',
        'message': f'Your company "{company_name}" account has been reinstated.',
        'type': NotificationType.EMPLOYER_UNSUSPENDED,
        'related_id': str(employer_id),
        'related_type': 'employer',
    }


# --- Jobs ---

def job_posted(job_title, company_name, job_id):
    return {
        'title': 'New Job Posted',
        'message': f'New job "{job_title}" posted by "{company_name}" is pending moderation.',
        'type': NotificationType.NEW_JOB_POSTING,
        'related_id': str(job_id),
        'related_type': 'job',
        'metadata': {'jobTitle': job_title, 'companyName': company_name},
    }


def job_approved(job_title, job_id):
    return {
        'title': 'Job Approved',
        'message': f'Your job posting "{job_title}" has been approved and is now live.',
        'type': NotificationType.JOB_APPROVED,
        'related_id': str(job_id),
        'related_type': 'job',
    }


def job_rejected(job_title, job_id, reason):
    return {
        'title': 'Job Rejected',
        'message': f'Your job posting "{job_title}" was rejected. Reason: {reason}',
        'type': NotificationType.JOB_REJECTED,
        'related_id': str(job_id),
        'related_type': 'job',
        'metadata': {'reason': reason},
    }


def job_suspended(job_title, job_id, reason):
    return {
        'title': 'Job Suspended',
        'message': f'Your job posting "{job_title}" has been suspended. Reason: {reason}',
        'type': NotificationType.JOB_SUSPENDED,
        'related_id': str(job_id),
        'related_type': 'job',
        'metadata': {'reason': reason},
    }


# --- Support ---

def support_request_opened(subject, requester_name, request_id, related_type='support_request'):
    return {
        'title': 'New Support Request',
        'message': f'{requester_name} opened a support request: "{subject}".',
        'type': NotificationType.NEW_SUPPORT_REQUEST,
        'related_id': str(request_id),
        'related_type': related_type,
        'metadata': {'subject': subject},
    }


def support_request_answered(subject, status, request_id, related_type='support_request'):
    return {
        'title': 'Support Request Updated',
        'message': f'An admin responded to your request "{subject}". Status: {status}.',
        'type': NotificationType.SYSTEM_ALERT,
        'related_id': str(request_id),
        'related_type': related_type,
        'metadata': {'status': status},
    }
