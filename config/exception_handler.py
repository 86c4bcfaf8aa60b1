"""
API error rendering.

Every error response has the shape ``{"message": ..., "code": ...}``.
Domain errors carry their own status; store failures become a generic 500
whose detail is only exposed when DEBUG is on.
"""

import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from apps.students.exceptions import CanteenServiceError

logger = logging.getLogger('apps.api')


def canteen_exception_handler(exc, context):
    if isinstance(exc, CanteenServiceError):
        set_rollback()
        return Response(
            {'message': exc.message, 'code': exc.code},
            status=exc.status_code,
        )

    if isinstance(exc, DatabaseError):
        set_rollback()
        view = context.get('view')
        logger.error(
            "Database error in %s", view.__class__.__name__ if view else 'unknown view',
            exc_info=exc,
        )
        body = {
            'message': 'Une erreur serveur est survenue. Veuillez réessayer.',
            'code': 'server_error',
        }
        if settings.DEBUG:
            body['detail'] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'message': 'Données invalides.',
            'code': 'invalid_input',
            'errors': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {
            'message': str(response.data['detail']),
            'code': getattr(response.data['detail'], 'code', 'error'),
        }
    return response
