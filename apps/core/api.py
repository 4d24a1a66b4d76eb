"""
JSON plumbing shared by every /api/admin/ endpoint.

Envelope on success: ``{"data": ..., "pagination"?: ..., "message"?: ..., "warnings"?: [...]}``
Envelope on failure: ``{"error": "<reason>"}``
"""

import json
import logging

from django.core.paginator import Paginator
from django.http import JsonResponse
from django.views import View

from config.constants import (
    PAGINATION_DEFAULT, PAGINATION_MAX,
    MSG_UNAUTHORIZED, MSG_PERMISSION_DENIED, MSG_INVALID_JSON, MSG_GENERIC_ERROR,
)
from .exceptions import PortalError, ValidationError

logger = logging.getLogger('apps.core')
security_logger = logging.getLogger('django.security')


def is_admin(user):
    return user.is_authenticated and (user.is_superuser or user.role == 'ADMIN')


def api_response(data=None, message=None, pagination=None, warnings=None, status=200):
    payload = {'data': data}
    if pagination is not None:
        payload['pagination'] = pagination
    if message:
        payload['message'] = message
    if warnings:
        payload['warnings'] = [str(w) for w in warnings]
    return JsonResponse(payload, status=status)


def error_response(message, status):
    return JsonResponse({'error': message}, status=status)


def _positive_int(value, default):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def paginate(request, queryset, serializer, default_limit=PAGINATION_DEFAULT):
    """Slice ``queryset`` by ``?page=&limit=`` and serialize the page."""
    limit = min(_positive_int(request.GET.get('limit'), default_limit), PAGINATION_MAX)
    paginator = Paginator(queryset, limit)
    page = paginator.get_page(_positive_int(request.GET.get('page'), 1))
    pagination = {
        'page': page.number,
        'limit': limit,
        'total': paginator.count,
        'totalPages': paginator.num_pages,
    }
    return [serializer(obj) for obj in page.object_list], pagination


def parse_bool(value):
    if value is None or value == '':
        return None
    return str(value).lower() in ('1', 'true', 'yes')


class AdminApiView(View):
    """
    Base class for admin JSON endpoints.
    - 401 when not logged in (the REST client treats this as session expiry).
    - 403 for authenticated non-admins.
    - PortalError subclasses become ``{"error": ...}`` with their status code.
    """

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return error_response(MSG_UNAUTHORIZED, 401)
        if not is_admin(request.user):
            security_logger.warning(
                f"Non-admin user={request.user.username} tried {request.method} {request.path}"
            )
            return error_response(MSG_PERMISSION_DENIED, 403)

        try:
            return super().dispatch(request, *args, **kwargs)
        except PortalError as exc:
            return error_response(exc.message, exc.status_code)
        except Exception:
            logger.exception(f"Unhandled error in {self.__class__.__name__} {request.method} {request.path}")
            return error_response(MSG_GENERIC_ERROR, 500)

    def get_json_body(self):
        if not self.request.body:
            return {}
        try:
            body = json.loads(self.request.body)
        except (ValueError, UnicodeDecodeError):
            raise ValidationError(MSG_INVALID_JSON)
        if not isinstance(body, dict):
            raise ValidationError(MSG_INVALID_JSON)
        return body
