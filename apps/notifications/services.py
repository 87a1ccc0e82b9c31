"""Email notifications sent to customers when staff decide on a booking."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification could not be handed to the mail transport or queue."""


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, html_message: str) -> None:
    """
    Sends one HTML email with a plain-text alternative.

    Raises:
        NotificationError: if the mail backend fails
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        raise NotificationError(f"Failed to send email to {recipient_email}") from e

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")


def _details_block(booking: "Booking") -> str:
    vehicle_name = booking.vehicle.name if booking.vehicle_id and booking.vehicle else booking.vehicle_type
    city = f"<p><strong>City:</strong> {escape(booking.city)}</p>" if booking.city else ""
    return f"""
        <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin: 20px 0;">
            <h3 style="margin-top: 0;">Booking Details</h3>
            <p><strong>Booking ID:</strong> #{booking.pk}</p>
            <p><strong>Vehicle:</strong> {escape(vehicle_name)}</p>
            {city}
            <p><strong>Pick-up:</strong> {escape(booking.pickup_location)} on {booking.pickup_date:%Y-%m-%d}</p>
            <p><strong>Return:</strong> {escape(booking.return_location)} on {booking.return_date:%Y-%m-%d}</p>
        </div>
    """


def build_status_email(booking: "Booking", status: str, reason: str | None = None) -> tuple[str, str]:
    """Subject and HTML body for a status change."""
    greeting = f"<p>Dear {escape(booking.name or 'customer')},</p>"
    details = _details_block(booking)

    if status == "accepted":
        subject = f"Your Vehicle Rental Booking #{booking.pk} has been Confirmed"
        body = f"""
            <h2 style="color: #4CAF50;">Booking Confirmed!</h2>
            {greeting}
            <p>Great news! Your rental booking has been <strong>accepted</strong>.</p>
            {details}
            <p>Please arrive at the pick-up location at your scheduled time with your ID and payment method.</p>
        """
    elif status == "rejected":
        subject = f"Your Vehicle Rental Booking #{booking.pk} Status Update"
        reason_line = f"<p><strong>Reason:</strong> {escape(reason)}</p>" if reason else ""
        body = f"""
            <h2 style="color: #F44336;">Booking Update</h2>
            {greeting}
            <p>We regret to inform you that your rental booking has been <strong>declined</strong>.</p>
            {reason_line}
            {details}
            <p>We encourage you to try booking a different vehicle or date range.</p>
        """
    else:
        subject = f"Your Vehicle Rental Booking #{booking.pk} Status Update"
        body = f"""
            <h2>Booking Status Update</h2>
            {greeting}
            <p>Your rental booking status has been updated to: <strong>{escape(status)}</strong>.</p>
            {details}
        """

    html_message = f"""
    <html>
    <body>
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            {body}
            <p>If you have any questions, please don't hesitate to contact us.</p>
            <p>Best regards,<br>The Rental Team</p>
        </div>
    </body>
    </html>
    """
    return subject, html_message


def send_booking_status_email(booking: "Booking", status: str, reason: str | None = None) -> bool:
    """Returns False when the booking has no email to write to."""
    if not booking.email:
        logger.warning(f"Could not send email notification: no email address for booking #{booking.pk}")
        return False

    subject, html_message = build_status_email(booking, status, reason)
    send_email_notification(booking.email, subject, html_message)
    return True


class EmailNotificationDispatcher:
    """
    Delivers booking status emails, inline or through Celery.

    ``use_queue`` defaults to the ``BOOKING_NOTIFICATIONS_ASYNC`` setting.
    Failures of either path surface as ``NotificationError``.
    """

    def __init__(self, use_queue: bool | None = None):
        if use_queue is None:
            use_queue = getattr(settings, "BOOKING_NOTIFICATIONS_ASYNC", False)
        self.use_queue = use_queue

    def dispatch(self, booking: "Booking", status: str, reason: str | None = None) -> None:
        if not self.use_queue:
            send_booking_status_email(booking, status, reason)
            return

        from .tasks import send_booking_status_email_task

        try:
            send_booking_status_email_task.delay(booking.pk, status, reason)
        except Exception as e:
            raise NotificationError(f"Could not enqueue status email for booking #{booking.pk}") from e
        logger.info(f"Queued status email for booking #{booking.pk} ({status})")
