"""
Normalization of remote API failures into ``{success, msg}`` results.

Callers branch on ``result['success']`` instead of handling exceptions.
"""
import logging

import requests
from django.conf import settings
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)

PASSWORD_STRENGTH_MESSAGE = (
    'Password does not meet strength requirements: minimum 8 characters with at least '
    'one letter, one number, and one special character (@$!%*?&)'
)


def is_development():
    return getattr(settings, 'WAREHOUSE_ENV', 'production') == 'development'


def _is_password_message(message):
    return (
        'Password does not meet strength requirements' in message
        or 'Password is invalid' in message
        or '密码' in message
    )


def _is_import_message(default_message, message=''):
    return (
        'import' in default_message
        or '导入' in default_message
        or 'Row' in message
        or '行' in message
    )


def _response_data(response):
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def handle_error(error, default_message, **default_data):
    """
    Turn a requests exception into a standardized error result.

    Args:
        error: exception raised by the API client
        default_message: message shown to the user when details are hidden
        **default_data: extra keys merged into the result (e.g. empty lists)

    Returns:
        dict with success, msg, status and, in development, debug details
    """
    development = is_development()
    response = getattr(error, 'response', None)
    data = _response_data(response) if response is not None else None

    if response is not None and data is not None:
        message = data.get('msg') or default_message
        if _is_password_message(message):
            message = PASSWORD_STRENGTH_MESSAGE
        show_detail = (
            'Password' in message
            or '密码' in message
            or _is_import_message(default_message, message)
            or development
        )
        result = {
            'success': data.get('success') or False,
            'msg': message if show_detail else default_message,
            'status': response.status_code,
        }
        if development:
            result['debug'] = data
        result.update(default_data)
        return result

    if _is_import_message(default_message):
        message = str(error) or default_message
    elif development:
        message = f'Internet error: {error}'
    else:
        message = 'Network error'
    result = {
        'success': False,
        'msg': message,
        'status': response.status_code if response is not None else 0,
    }
    if development:
        result['debug'] = repr(error)
    result.update(default_data)
    return result


def call_api(operation, default_message, func, *args, **default_data):
    """Run an API call and normalize any requests failure"""
    try:
        return func(*args)
    except requests.RequestException as error:
        logger.error(f'Error {operation}: {error}')
        return handle_error(error, default_message, **default_data)


def result_response(result, success_status=status.HTTP_200_OK):
    """Map a normalized API result onto a DRF response"""
    if result.get('success'):
        return Response(result, status=success_status)
    if result.get('status', 0) == 0:
        return Response(result, status=status.HTTP_502_BAD_GATEWAY)
    return Response(result, status=status.HTTP_400_BAD_REQUEST)


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    """Blocking client-side failure: nothing was sent to the remote API"""
    payload = {'success': False, 'msg': message}
    payload.update(extra)
    return Response(payload, status=status_code)
