"""
Shared API exceptions and the custom exception handler for Django REST Framework.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ServiceNotConfigured(APIException):
    """A third-party integration is missing its credentials."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'This service is not configured.'
    default_code = 'service_not_configured'


class UpstreamServiceError(APIException):
    """A third-party API answered with an error."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'The upstream service request failed.'
    default_code = 'upstream_error'


class AuthenticationNotConfigured(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Authentication is not configured on the server.'
    default_code = 'auth_not_configured'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent JSON error responses.

    Response format:
    {
        "success": false,
        "error": {
            "code": "error_code",
            "message": "Human-readable message",
            "details": { ... }  // optional, for field-level validation errors
        }
    }
    """
    # Convert Django ValidationError to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.message_dict if hasattr(exc, 'message_dict') else exc.messages)

    # rest_framework.views loads the authentication classes, which import this module
    from rest_framework.views import exception_handler

    response = exception_handler(exc, context)

    if response is None:
        # Unhandled exception
        logger.exception(
            'Unhandled exception in %s',
            context.get('view', 'unknown view'),
            exc_info=exc,
        )
        return Response(
            {
                'success': False,
                'error': {
                    'code': 'internal_error',
                    'message': 'An unexpected error occurred. Please try again later.',
                },
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response.data = {
        'success': False,
        'error': _format_error(exc, response),
    }
    return response


def _format_error(exc, response):
    """Format the error payload based on exception type."""
    if isinstance(exc, DRFValidationError):
        return {
            'code': 'validation_error',
            'message': 'Invalid input.',
            'details': response.data,
        }

    if isinstance(exc, Http404):
        return {
            'code': 'not_found',
            'message': 'The requested resource was not found.',
        }

    if isinstance(exc, APIException):
        code = exc.get_codes()
        return {
            'code': code if isinstance(code, str) else exc.default_code,
            'message': str(exc.detail),
        }

    return {
        'code': 'error',
        'message': 'An error occurred.',
    }


def error_response(code, message, http_status):
    """Build an error response in the same shape as the exception handler."""
    return Response(
        {
            'success': False,
            'error': {
                'code': code,
                'message': message,
            },
        },
        status=http_status,
    )
