"""
Project-wide DRF exception handler.

Services raise plain Django exceptions (``ObjectDoesNotExist``,
``ValidationError``); this handler maps them onto DRF's 404 / 400 and
makes sure every error body carries ``detail`` and ``code``.
"""
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _from_django(exc):
    if isinstance(exc, ObjectDoesNotExist):
        return exceptions.NotFound(str(exc) or None)
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            return exceptions.ValidationError(exc.message_dict)
        return exceptions.ValidationError({"detail": exc.messages[0] if exc.messages else "Invalid input."})
    return exc


def api_exception_handler(exc, context):
    exc = _from_django(exc)
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(response.data, dict):
        if "code" not in response.data:
            codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
            response.data["code"] = codes if isinstance(codes, str) else getattr(exc, "default_code", "error")
    else:
        response.data = {"detail": response.data, "code": getattr(exc, "default_code", "error")}

    if response.status_code >= 500:
        logger.error("Unhandled API error in %s: %s", context.get("view"), exc)
    return response
