"""Fallback error views rendering the response envelope outside DRF."""

from __future__ import annotations

from django.http import JsonResponse  # type: ignore

from shared.api.responses import error_envelope


def not_found(request, exception=None):  # type: ignore
    return JsonResponse(error_envelope("Resource not found", error="not_found"), status=404)


def server_error(request):  # type: ignore
    return JsonResponse(error_envelope("An unexpected error occurred.", error="server_error"), status=500)
