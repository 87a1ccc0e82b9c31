"""Capability gate for staff-only endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsPrivilegedUser(permissions.BasePermission):
    """
    Allows access only to authenticated staff.

    Authentication itself is delegated to the configured DRF authentication
    classes; this check only answers "is the caller privileged". DRF turns a
    failed check into 401 for anonymous callers and 403 for everyone else.
    """

    message = "Unauthorized: Admin access required"

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
