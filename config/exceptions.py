"""
REST framework exception handler.

Renders the exchange error taxonomy as
``{"error": message, "kind": kind, "retryable": bool}`` with the status code
carried by the exception class. Everything else goes to DRF's default
handler.
"""

from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.common.exceptions import ExchangeServiceError


def exchange_exception_handler(exc, context):
    if isinstance(exc, ExchangeServiceError):
        return Response(
            {
                'error': exc.message,
                'kind': exc.kind,
                'retryable': exc.retryable,
            },
            status=exc.status_code,
        )
    return exception_handler(exc, context)
