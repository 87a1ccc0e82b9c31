"""Persistence services for booking requests."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore

from shared.domain.exceptions import NotFoundError

from .models import Booking

logger = logging.getLogger(__name__)


class BookingNotFound(NotFoundError):
    def __init__(self, booking_id: Any):
        super().__init__(f"Booking with ID {booking_id} not found")
        self.booking_id = booking_id


class BookingLedger:
    """
    Records booking requests and their status.

    The ledger does not consult availability: two requests for the same
    vehicle and overlapping dates are both recorded as pending, and staff
    settle the conflict when accepting one of them.
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def _queryset(self):  # type: ignore
        return Booking.objects.using(self.using).select_related("vehicle")

    def create(self, data: Mapping[str, Any]) -> Booking:
        booking = Booking(**data)
        booking.status = Booking.Status.PENDING
        booking.rejection_reason = None
        booking.full_clean()
        booking.save(using=self.using)
        logger.info(
            f"Booking {booking.pk} created for {booking.vehicle_type} "
            f"{booking.pickup_date.isoformat()} - {booking.return_date.isoformat()}"
        )
        return booking

    def get(self, booking_id: Any) -> Booking:
        try:
            return self._queryset().get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError, TypeError):
            raise BookingNotFound(booking_id)

    def list_all(self) -> list[Booking]:
        return list(self._queryset().order_by("-created_at", "-id"))

    def list_by_requester_email(self, email: str) -> list[Booking]:
        return list(self._queryset().filter(email=email).order_by("-created_at", "-id"))

    def set_status(self, booking_id: Any, status: str, rejection_reason: str | None = None) -> Booking:
        """
        Moves a booking to ``status``.

        Any status may follow any other. A given ``rejection_reason`` is
        stored; ``None`` keeps whatever reason was stored before.
        """
        if status not in Booking.Status.values:
            raise ValidationError({"status": [f"Invalid status '{status}'."]})

        with transaction.atomic(using=self.using):
            try:
                booking = Booking.objects.using(self.using).select_for_update().get(pk=booking_id)
            except (Booking.DoesNotExist, ValueError, TypeError):
                raise BookingNotFound(booking_id)

            previous = booking.status
            booking.status = status
            update_fields = ["status", "updated_at"]
            if rejection_reason is not None:
                booking.rejection_reason = rejection_reason
                update_fields.append("rejection_reason")
            booking.save(using=self.using, update_fields=update_fields)

        logger.info(f"Booking {booking.pk} status changed: {previous} -> {status}")
        return booking
