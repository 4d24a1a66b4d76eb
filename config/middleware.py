"""
==========================================================
REQUEST LOGGING MIDDLEWARE
==========================================================
Logs every HTTP request with timing, user info, and status codes.
Automatically flags slow requests (>2s) and server errors (5xx).

Output → logs/requests.log + console
"""

import time
import logging

logger = logging.getLogger('middleware')

SLOW_REQUEST_MS = 2000


class RequestLoggingMiddleware:
    """Log every request: method, path, user, status, duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start_time = time.time()

        user = getattr(request, 'user', None)
        username = user.username if user and user.is_authenticated else 'anonymous'
        method = request.method
        path = request.get_full_path()

        response = self.get_response(request)

        duration_ms = (time.time() - start_time) * 1000
        status = response.status_code

        msg = f"{method} {path} | user={username} | status={status} | {duration_ms:.0f}ms"

        if status >= 500:
            logger.error(f"🔴 SERVER ERROR: {msg}")
        elif status in (401, 403):
            logger.warning(f"🔒 ACCESS DENIED: {msg}")
        elif status >= 400:
            logger.warning(f"⚠️  CLIENT ERROR: {msg}")
        elif duration_ms > SLOW_REQUEST_MS:
            logger.warning(f"🐌 SLOW REQUEST: {msg}")
        else:
            logger.info(f"✅ {msg}")

        return response

    def process_exception(self, request, exception):
        """Log unhandled exceptions with full context."""
        user = getattr(request, 'user', None)
        username = user.username if user and user.is_authenticated else 'anonymous'
        logger.critical(
            f"💥 UNHANDLED EXCEPTION: {request.method} {request.get_full_path()} "
            f"| user={username} | error={type(exception).__name__}: {exception}",
            exc_info=True
        )
        return None  # Let Django handle it
