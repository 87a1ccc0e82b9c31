"""
Booking Command Handlers

Use cases that change a booking and tell the customer about it.

Commands:
- TransitionBookingCommand: Move a booking to pending/accepted/rejected
"""

from dataclasses import dataclass
import logging

from apps.bookings.models import Booking
from apps.bookings.services import BookingLedger
from apps.notifications.services import EmailNotificationDispatcher
from apps.vehicles.services import OverlapResolver, build_overlap_resolver
from shared.domain.exceptions import DependencyUnavailable

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class TransitionBookingCommand:
    """Command issued by staff when deciding on a booking request"""
    booking_id: int | str
    status: str
    reason: str | None = None


# ===== Command Handlers =====

class BookingLifecycleCoordinator:
    """
    Handler for status transitions

    The ledger is the source of truth: once ``set_status`` returns the
    transition stands, and notification is best effort on top of it.

    Steps:
    1. Persist the new status (and reason, when given)
    2. On acceptance, check the vehicle's availability windows (advisory)
    3. Notify the customer; failures are logged, never raised
    4. Return the updated booking
    """

    def __init__(
        self,
        ledger: BookingLedger,
        dispatcher: EmailNotificationDispatcher,
        resolver: OverlapResolver | None = None,
    ):
        self.ledger = ledger
        self.dispatcher = dispatcher
        self.resolver = resolver

    def handle(self, command: TransitionBookingCommand) -> Booking:
        return self.transition(command.booking_id, command.status, command.reason)

    def transition(self, booking_id, status: str, reason: str | None = None) -> Booking:
        logger.info(f"Transitioning booking {booking_id} to {status}")

        booking = self.ledger.set_status(booking_id, status, reason)

        if status == Booking.Status.ACCEPTED:
            self._check_availability(booking)

        self._notify(booking, status, reason)
        return booking

    def _check_availability(self, booking: Booking) -> None:
        if self.resolver is None or booking.vehicle_id is None:
            return

        try:
            available = self.resolver.is_vehicle_available(
                booking.vehicle_id, booking.pickup_date, booking.return_date
            )
        except DependencyUnavailable as exc:
            logger.warning(f"Could not verify availability for accepted booking {booking.pk}: {exc}")
            return

        if not available:
            logger.warning(
                f"Booking {booking.pk} accepted although vehicle {booking.vehicle_id} "
                f"is marked unavailable for {booking.pickup_date.isoformat()} - {booking.return_date.isoformat()}"
            )

    def _notify(self, booking: Booking, status: str, reason: str | None) -> None:
        # The stored reason applies when the caller did not repeat it.
        reason = reason if reason is not None else booking.rejection_reason
        try:
            self.dispatcher.dispatch(booking, status, reason)
        except Exception as exc:
            logger.error(f"Failed to notify customer about booking {booking.pk}: {exc}", exc_info=True)


def build_lifecycle_coordinator() -> BookingLifecycleCoordinator:
    return BookingLifecycleCoordinator(
        ledger=BookingLedger(),
        dispatcher=EmailNotificationDispatcher(),
        resolver=build_overlap_resolver(),
    )
