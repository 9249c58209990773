"""
Maps every exception raised inside a DRF view onto the API envelope
``{"success": false, "message": ...}``.
"""
import logging
import traceback

from django.conf import settings
from django.http import Http404, JsonResponse
from rest_framework import exceptions, status
from rest_framework.views import exception_handler, set_rollback

from utils.response import error_response

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = 'Internal server error'


def _flatten(detail):
    """Collect the plain messages of a (possibly nested) DRF error detail."""
    if isinstance(detail, dict):
        return [message for value in detail.values() for message in _flatten(value)]
    if isinstance(detail, (list, tuple)):
        return [message for value in detail for message in _flatten(value)]
    return [str(detail)]


def envelope_exception_handler(exc, context):
    view = context.get('view')

    # get_object() raises Django's Http404; views name the missing resource
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(getattr(view, 'not_found_message', 'Resource not found'))

    response = exception_handler(exc, context)

    if response is None:
        logger.exception(f"Unhandled error in {type(view).__name__}: {exc}", exc_info=exc)
        set_rollback()
        envelope = error_response(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if settings.DEBUG:
            envelope.data['stack'] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return envelope

    errors = None
    if isinstance(exc, exceptions.ValidationError):
        errors = exc.detail if isinstance(exc.detail, dict) else {'non_field_errors': exc.detail}

    envelope = error_response(', '.join(_flatten(response.data)), response.status_code, errors=errors)
    for header in ('WWW-Authenticate', 'Allow', 'Retry-After'):
        if header in response:
            envelope[header] = response[header]
    return envelope


def api_not_found(request, exception=None):
    return JsonResponse({'success': False, 'message': 'Endpoint not found'}, status=status.HTTP_404_NOT_FOUND)


def api_server_error(request):
    return JsonResponse({'success': False, 'message': SERVER_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
