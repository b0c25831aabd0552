import logging

from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    DRF's default handler plus a machine readable ``code`` next to ``detail``.

    Called from inside DRF's except block, so ``logger.exception`` picks up
    the traceback of the exception being handled.

    ValidationError bodies (field -> messages) are returned untouched.
    """
    if isinstance(exc, ProtectedError):
        return Response(
            {"detail": "Resource is referenced by existing orders.", "code": "protected"},
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)
    if response is None:
        # unhandled: Django turns it into a 500
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
        return None

    if isinstance(response.data, dict) and "detail" in response.data:
        if isinstance(exc, Http404):
            code = "not_found"
        elif isinstance(exc, APIException) and isinstance(exc.get_codes(), str):
            code = exc.get_codes()
        else:
            code = getattr(exc, "default_code", "error")
        response.data["code"] = code

    if response.status_code >= 500:
        logger.exception("Request failed with %s: %s", response.status_code, response.data)
    return response
