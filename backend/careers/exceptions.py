"""
Domain errors and the custom exception handler for consistent API error responses.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status, exceptions as drf_exceptions
import logging

logger = logging.getLogger(__name__)


class Unauthenticated(drf_exceptions.NotAuthenticated):
    default_detail = 'Authentication required.'


class NotFound(drf_exceptions.NotFound):
    default_detail = 'The requested resource was not found.'


class CareersError(drf_exceptions.APIException):
    """Base class for errors raised by the application/job/wallet workflows."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request could not be completed.'
    default_code = 'error'


class ProfileIncomplete(CareersError):
    default_detail = 'User profile is incomplete for auto-apply. Please complete your profile first.'
    default_code = 'profile_incomplete'


class BelowMinimum(CareersError):
    default_detail = 'Redemption amount is below the minimum.'
    default_code = 'below_minimum'


class InsufficientBalance(CareersError):
    default_detail = 'Insufficient wallet balance.'
    default_code = 'insufficient_balance'


class InvalidDetails(CareersError):
    default_detail = 'Redemption details are missing or invalid.'
    default_code = 'invalid_details'


class OptimizationFailed(CareersError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Resume optimization failed.'
    default_code = 'optimization_failed'


class ProviderUnavailable(CareersError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'An external service is unavailable. Please try again later.'
    default_code = 'provider_unavailable'


class SettlementUnavailable(CareersError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Redemption service is unavailable. Please try again later.'
    default_code = 'settlement_unavailable'


class PersistenceError(CareersError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not save your request. Please try again.'
    default_code = 'persistence_error'


def _first_message(value):
    """Return the first leaf message of a (possibly nested) DRF error structure."""
    if isinstance(value, dict):
        for key, inner in value.items():
            msg = _first_message(inner)
            if msg:
                if key == 'non_field_errors':
                    return msg
                return f"{str(key).replace('_', ' ')}: {msg}"
        return ''
    if isinstance(value, (list, tuple)):
        for index, inner in enumerate(value):
            msg = _first_message(inner)
            if msg:
                # Nested serializer lists report one dict per entry
                if isinstance(inner, dict):
                    return f"entry {index + 1}, {msg}"
                return msg
        return ''
    return str(value) if value else ''


def _collect_messages_from_response_data(response_data):
    """Build a list of human-readable messages from DRF error response data."""
    messages = []
    if isinstance(response_data, dict):
        # DRF often returns {'field': ['msg']} or {'detail': 'msg'}
        if 'detail' in response_data and not isinstance(response_data.get('detail'), (dict, list)):
            messages.append(str(response_data['detail']))
        for field, value in response_data.items():
            if field == 'detail':
                continue
            msg = _first_message(value)
            if not msg:
                continue
            if field == 'non_field_errors':
                messages.append(msg)
            else:
                field_label = str(field).replace('_', ' ').capitalize()
                messages.append(f"{field_label}: {msg}")
    elif isinstance(response_data, (list, tuple)):
        for v in response_data:
            if v:
                messages.append(str(v))
    elif response_data:
        messages.append(str(response_data))
    return messages


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error response format.

    Returns:
        Response with format:
        {
            "error": {
                "code": "error_code",
                "message": "User-friendly error message",
                "messages": [...],
                "details": {...}  # Optional field-specific errors
            }
        }
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        # Ensure auth failures consistently return 401 so clients can re-auth.
        if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
            response.status_code = status.HTTP_401_UNAUTHORIZED

        messages = _collect_messages_from_response_data(response.data)
        custom_response_data = {
            'error': {
                'code': get_error_code(exc, response.status_code),
                'message': (messages[0] if messages else get_error_message(exc, response.data)),
            }
        }
        if messages:
            custom_response_data['error']['messages'] = messages

        # Add field-specific errors if available
        if isinstance(response.data, dict):
            details = {}
            for field, errors in response.data.items():
                if field == 'detail':
                    continue
                if isinstance(errors, list):
                    if errors and all(isinstance(e, str) for e in errors):
                        details[field] = errors[0]
                    else:
                        details[field] = errors or 'Invalid value'
                else:
                    details[field] = errors if isinstance(errors, dict) else str(errors)

            if details:
                custom_response_data['error']['details'] = details

        response.data = custom_response_data
    else:
        # Log unhandled exceptions
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        response = Response(
            {
                'error': {
                    'code': 'internal_server_error',
                    'message': 'An unexpected error occurred. Please try again later.',
                }
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response


def get_error_code(exc, status_code):
    """Generate error code from exception."""
    if isinstance(exc, drf_exceptions.ValidationError):
        return 'validation_error'
    if hasattr(exc, 'default_code'):
        return exc.default_code

    code_map = {
        400: 'bad_request',
        401: 'unauthorized',
        403: 'forbidden',
        404: 'not_found',
        405: 'method_not_allowed',
        409: 'conflict',
        422: 'validation_error',
        429: 'too_many_requests',
        500: 'internal_server_error',
    }

    return code_map.get(status_code, 'error')


def get_error_message(exc, response_data):
    """Extract user-friendly error message."""
    if hasattr(exc, 'detail'):
        detail = exc.detail
        if isinstance(detail, dict):
            # Return first error message from dict
            for value in detail.values():
                if isinstance(value, list) and value:
                    return str(value[0])
                return str(value)
        return str(detail)

    if isinstance(response_data, dict):
        if 'detail' in response_data:
            return str(response_data['detail'])

        for value in response_data.values():
            if isinstance(value, list) and value:
                return str(value[0])
            return str(value)

    return 'An error occurred'
