"""
==========================================================
USER-FACING MESSAGES
==========================================================
All success, error, and warning messages returned by the API.
Change the wording once → updates across the entire app.
"""

# --- Auth ---
MSG_UNAUTHORIZED = "Unauthorized"
MSG_SESSION_EXPIRED = "Session expired. Please log in again."

# --- Employers ---
MSG_EMPLOYER_NOT_FOUND = "Employer not found"
MSG_EMPLOYER_APPROVED = "Employer approved successfully"
MSG_EMPLOYER_REJECTED = "Employer rejected successfully"
MSG_EMPLOYER_SUSPENDED = "Employer suspended successfully"
MSG_EMPLOYER_UNSUSPENDED = "Employer unsuspended successfully"
MSG_EMPLOYER_NOT_APPROVED = "Employer must be approved and active to post jobs"

# --- Jobs ---
MSG_JOB_NOT_FOUND = "Job not found"
MSG_JOB_APPROVED = "Job approved successfully"
MSG_JOB_REJECTED = "Job rejected successfully"
MSG_JOB_SUSPENDED = "Job suspended successfully"

# --- Moderation ---
MSG_REJECTION_REASON_REQUIRED = "Rejection reason is required"
MSG_SUSPENSION_REASON_REQUIRED = "Suspension reason is required"
MSG_INVALID_TRANSITION = "Cannot {action} {entity} with status {status}"
MSG_ALREADY_SUSPENDED = "Employer is already suspended"
MSG_NOT_SUSPENDED = "Employer is not suspended"
MSG_UNSUSPEND_UNSUPPORTED = "Only employers can be unsuspended"
MSG_MODERATION_CONFLICT = "{entity} was modified by another admin; reload and try again"
MSG_TEXT_FIELD_INVALID = "{field} must be a string"

# --- Notifications ---
MSG_NOTIFICATION_NOT_FOUND = "Notification not found"
MSG_NOTIFICATION_FORBIDDEN = "You cannot modify another user's notification"
MSG_NOTIFICATIONS_READ_ALL = "All notifications marked as read"
MSG_USER_NOT_FOUND = "User not found"
MSG_DELIVERY_DEGRADED = "Saved, but real-time delivery failed; the recipient will see it on next refresh"

# --- Announcements ---
MSG_ANNOUNCEMENT_NOT_FOUND = "Announcement not found"
MSG_ANNOUNCEMENT_DELETED = "Announcement deleted successfully"
MSG_ANNOUNCEMENT_NO_FIELDS = "At least one field (title, content, type, status) is required"

# --- Support ---
MSG_SUPPORT_NOT_FOUND = "Support request not found"
MSG_ESCALATION_NOT_FOUND = "Escalation not found"
MSG_RESPONSE_REQUIRED = "Response is required"
MSG_SUPPORT_UPDATED = "Support request updated"

# --- Candidates, applications & chats ---
MSG_CANDIDATE_NOT_FOUND = "Candidate not found"
MSG_APPLICATION_NOT_FOUND = "Application not found"
MSG_CHAT_NOT_FOUND = "Chat not found"

# --- Settings ---
MSG_SETTINGS_UPDATED = "Settings updated successfully"

# --- Generic ---
MSG_PERMISSION_DENIED = "You do not have permission to perform this action."
MSG_INVALID_JSON = "Request body must be valid JSON"
MSG_GENERIC_ERROR = "Something went wrong. Please try again."
