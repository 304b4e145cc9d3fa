"""
Custom exception handlers for consistent API responses
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """
    Base class for business rule failures raised by service layers.

    ``code`` is a stable machine-readable identifier, ``status_code`` the HTTP
    status the API answers with when the error escapes a view.
    """
    code = 'service_error'
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Operation failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    if isinstance(exc, ServiceError):
        logger.warning(f"Service error in {context['view'].__class__.__name__}: {exc.code} - {exc.message}")
        return Response({
            'code': exc.status_code,
            'msg': exc.message,
            'errors': {'code': exc.code},
        }, status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        # Log the exception
        logger.error(f"API Exception: {exc}", exc_info=True)

        # Create custom error response format
        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        # Handle specific error types
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'

        response.data = custom_response_data
        return response

    # Unhandled errors become a 500 without leaking internals
    logger.error(f"Unhandled API exception: {exc}", exc_info=True)
    request = context.get('request')
    errors = {'detail': 'Internal server error'}
    if request is not None and getattr(request, 'user', None) is not None and request.user.is_staff:
        errors = {'detail': str(exc)}
    return Response({
        'code': status.HTTP_500_INTERNAL_SERVER_ERROR,
        'msg': 'Internal server error',
        'errors': errors,
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
