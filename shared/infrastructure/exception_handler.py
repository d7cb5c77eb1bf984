"""
DRF exception handler for application errors.

Renders ApplicationError subclasses raised by command handlers with their
own status code and error payload; everything else falls through to the
default DRF handler.
"""

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.application.exceptions import ApplicationError

logger = logging.getLogger(__name__)


def application_exception_handler(exc, context):
    if isinstance(exc, ApplicationError):
        view = context.get("view")
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        return Response(exc.to_dict(), status=exc.status_code)
    return drf_exception_handler(exc, context)
