import logging
from datetime import datetime, timezone

import pytest

from apps.bookings.application.command_handlers import (
    BookingLifecycleCoordinator,
    TransitionBookingCommand,
)
from apps.bookings.services import BookingLedger, BookingNotFound
from apps.notifications.services import NotificationError
from apps.vehicles.models import AvailabilityWindow, Vehicle
from apps.vehicles.services import AvailabilityWindowStore, OverlapResolver, VehicleCatalog


def at(day):
    return datetime(2025, 7, day, 10, tzinfo=timezone.utc)


class RecordingDispatcher:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def dispatch(self, booking, status, reason=None):
        self.sent.append((booking.pk, status, reason))
        if self.error:
            raise self.error


@pytest.fixture
def vehicle():
    return Vehicle.objects.create(name="Model S", vehicle_type="Sedan")


@pytest.fixture
def booking(vehicle):
    return BookingLedger().create(
        {
            "vehicle": vehicle,
            "vehicle_type": "Sedan",
            "pickup_location": "Airport",
            "return_location": "Airport",
            "pickup_date": at(1),
            "return_date": at(4),
            "email": "alex@example.com",
        }
    )


def coordinator(dispatcher, resolver=None):
    return BookingLifecycleCoordinator(BookingLedger(), dispatcher, resolver)


@pytest.mark.django_db
def test_transition_persists_and_notifies(booking):
    dispatcher = RecordingDispatcher()

    updated = coordinator(dispatcher).transition(booking.pk, "rejected", "no availability")

    assert updated.status == "rejected"
    assert BookingLedger().get(booking.pk).rejection_reason == "no availability"
    assert dispatcher.sent == [(booking.pk, "rejected", "no availability")]


@pytest.mark.django_db
def test_notification_failure_does_not_undo_transition(booking):
    dispatcher = RecordingDispatcher(error=NotificationError("smtp down"))

    updated = coordinator(dispatcher).transition(booking.pk, "accepted")

    assert updated.status == "accepted"
    assert BookingLedger().get(booking.pk).status == "accepted"


@pytest.mark.django_db
def test_repeated_accept_is_idempotent_but_renotifies(booking):
    dispatcher = RecordingDispatcher()
    handler = coordinator(dispatcher)

    handler.transition(booking.pk, "accepted")
    handler.transition(booking.pk, "accepted")

    assert BookingLedger().get(booking.pk).status == "accepted"
    assert len(dispatcher.sent) == 2


@pytest.mark.django_db
def test_revert_to_pending_needs_no_reason(booking):
    dispatcher = RecordingDispatcher()
    handler = coordinator(dispatcher)
    handler.transition(booking.pk, "rejected", "no availability")

    reverted = handler.handle(TransitionBookingCommand(booking_id=booking.pk, status="pending"))

    assert reverted.status == "pending"
    assert reverted.rejection_reason == "no availability"
    assert dispatcher.sent[-1] == (booking.pk, "pending", "no availability")


@pytest.mark.django_db
def test_unknown_booking_propagates_without_notifying():
    dispatcher = RecordingDispatcher()

    with pytest.raises(BookingNotFound):
        coordinator(dispatcher).transition(4242, "accepted")
    assert dispatcher.sent == []


@pytest.mark.django_db
def test_accepting_over_blocked_window_only_warns(booking, vehicle, caplog):
    AvailabilityWindow.objects.create(vehicle=vehicle, start_date=at(2), end_date=at(3), is_available=False)
    resolver = OverlapResolver(AvailabilityWindowStore(), VehicleCatalog())
    dispatcher = RecordingDispatcher()

    with caplog.at_level(logging.WARNING, logger="apps.bookings.application.command_handlers"):
        updated = coordinator(dispatcher, resolver).transition(booking.pk, "accepted")

    assert updated.status == "accepted"
    assert "marked unavailable" in caplog.text
    assert len(dispatcher.sent) == 1
