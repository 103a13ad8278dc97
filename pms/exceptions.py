"""
API error handling.

Every error leaving the API is shaped as ``{"error": str, "details"?: ...}``.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class BadRequest(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'bad_request'


class Conflict(BadRequest):
    """The request clashes with existing state (duplicate email, existing member...)."""
    default_detail = 'The request conflicts with existing data.'
    default_code = 'conflict'


class TimerConflict(Conflict):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A timer is already running on another task.'
    default_code = 'timer_conflict'


def _message(detail, fallback):
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail and isinstance(detail[0], str):
        return detail[0]
    return fallback


def api_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(_message(exc.args[0] if exc.args else None, 'Not found'))
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
        set_rollback()
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        response.data = {'error': 'Invalid data', 'details': exc.detail}
    elif isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = {'error': 'Not authenticated'}
    else:
        response.data = {'error': _message(exc.detail, 'Request failed')}

    return response
