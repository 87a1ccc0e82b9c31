"""DRF exception handler rendering every error in the response envelope.

Mapping:
- Django/DRF ``ValidationError`` -> 400 with field-level ``errors``
- ``NotFoundError`` / ``Http404`` -> 404
- ``NotAuthenticated`` / ``PermissionDenied`` -> 401 / 403
- ``DependencyUnavailable`` -> 503
- anything else -> 500, logged with traceback
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.api.fields import to_camel
from shared.api.responses import error_envelope
from shared.domain.exceptions import DependencyUnavailable, NotFoundError

logger = logging.getLogger(__name__)


class ServiceUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "A required backing service is temporarily unavailable."
    default_code = "dependency_unavailable"


def django_error_detail(exc: DjangoValidationError) -> dict[str, list[str]]:
    """Field-level detail with camelCase keys, matching the request bodies."""
    if hasattr(exc, "error_dict"):
        return {to_camel(field): list(messages) for field, messages in exc.message_dict.items()}
    return {"non_field_errors": list(exc.messages)}


def envelope_exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=django_error_detail(exc))
    elif isinstance(exc, NotFoundError):
        exc = exceptions.NotFound(detail=str(exc))
    elif isinstance(exc, DependencyUnavailable):
        exc = ServiceUnavailable(detail=str(exc))

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=exc,
        )
        return Response(
            error_envelope("An unexpected error occurred.", error=exc.__class__.__name__),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        detail = response.data if isinstance(response.data, dict) else {"non_field_errors": response.data}
        response.data = error_envelope("Invalid request data", error="validation_error", errors=detail)
    else:
        message = response.data.get("detail", str(exc)) if isinstance(response.data, dict) else str(exc)
        code = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
        response.data = error_envelope(str(message), error=code if isinstance(code, str) else None)

    if isinstance(exc, ServiceUnavailable):
        logger.warning(f"Dependency unavailable: {exc.detail}")

    return response
