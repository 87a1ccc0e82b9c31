"""Celery tasks for customer notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import NotificationError, send_booking_status_email

logger = logging.getLogger(__name__)


@shared_task(
    name="notifications.send_booking_status_email",
    autoretry_for=(NotificationError,),
    retry_backoff=True,
    max_retries=3,
)
def send_booking_status_email_task(booking_id: int, status: str, reason: str | None = None) -> bool:
    """Sends the status email for a booking, re-reading it from the database."""
    from apps.bookings.models import Booking

    try:
        booking = Booking.objects.select_related("vehicle").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning(f"Booking {booking_id} no longer exists; status email not sent")
        return False

    return send_booking_status_email(booking, status, reason)
