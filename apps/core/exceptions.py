"""
Domain errors shared by every service.

Services raise these; the JSON views in core.api turn them into
``{"error": ...}`` responses with the matching HTTP status.
"""


class PortalError(Exception):
    status_code = 400
    default_message = "Request could not be processed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(PortalError):
    status_code = 404
    default_message = "The requested resource was not found."


class ValidationError(PortalError):
    status_code = 400
    default_message = "Invalid input."


class InvalidStateError(PortalError):
    status_code = 409
    default_message = "This action is not allowed in the current state."


class ConflictError(InvalidStateError):
    """The precondition held on read but a concurrent write changed the row."""
    default_message = "The record was modified concurrently."


class ForbiddenError(PortalError):
    status_code = 403
    default_message = "You do not have permission to perform this action."


class DeliveryDegraded(Exception):
    """
    Non-fatal: the record was persisted but the real-time push failed.

    Never raised out of a committed operation; collected on results and
    reported to the caller as a warning.
    """

    def __init__(self, message, user_id=None, channel=None):
        self.message = message
        self.user_id = user_id
        self.channel = channel
        super().__init__(message)

    def __str__(self):
        return self.message
