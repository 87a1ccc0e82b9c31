from datetime import datetime, timezone

import pytest
from django.core.exceptions import ValidationError

from apps.bookings.models import Booking
from apps.bookings.services import BookingLedger, BookingNotFound
from apps.vehicles.models import Vehicle


def at(day):
    return datetime(2025, 7, day, 10, tzinfo=timezone.utc)


@pytest.fixture
def ledger():
    return BookingLedger()


@pytest.fixture
def vehicle():
    return Vehicle.objects.create(name="Model S", vehicle_type="Sedan")


def request_data(vehicle, **overrides):
    data = {
        "vehicle": vehicle,
        "vehicle_type": "Sedan",
        "pickup_location": "Airport",
        "return_location": "Airport",
        "pickup_date": at(1),
        "return_date": at(4),
        "name": "Alex Doe",
        "email": "alex@example.com",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_create_defaults_to_pending(ledger, vehicle):
    booking = ledger.create(request_data(vehicle, status="accepted"))

    assert booking.pk is not None
    assert booking.status == Booking.Status.PENDING
    assert booking.rejection_reason is None
    assert booking.created_at is not None


@pytest.mark.django_db
def test_create_rejects_bad_dates_and_email(ledger, vehicle):
    with pytest.raises(ValidationError) as excinfo:
        ledger.create(request_data(vehicle, return_date=at(1)))
    assert "return_date" in excinfo.value.message_dict

    with pytest.raises(ValidationError) as excinfo:
        ledger.create(request_data(vehicle, email="broken"))
    assert "email" in excinfo.value.message_dict

    assert Booking.objects.count() == 0


@pytest.mark.django_db
def test_contact_fields_are_optional(ledger):
    booking = ledger.create(request_data(None, name=None, email=None))

    assert booking.vehicle is None
    assert booking.email is None


@pytest.mark.django_db
def test_get_unknown_booking(ledger):
    with pytest.raises(BookingNotFound) as excinfo:
        ledger.get(4242)
    assert str(excinfo.value) == "Booking with ID 4242 not found"


@pytest.mark.django_db
def test_list_all_newest_first(ledger, vehicle):
    first = ledger.create(request_data(vehicle))
    second = ledger.create(request_data(vehicle))

    assert [booking.pk for booking in ledger.list_all()] == [second.pk, first.pk]


@pytest.mark.django_db
def test_list_by_email_is_exact_match(ledger, vehicle):
    mine = ledger.create(request_data(vehicle))
    ledger.create(request_data(vehicle, email="Alex@example.com"))
    ledger.create(request_data(vehicle, email="someone@example.com"))

    assert [booking.pk for booking in ledger.list_by_requester_email("alex@example.com")] == [mine.pk]
    assert ledger.list_by_requester_email("nobody@example.com") == []


@pytest.mark.django_db
def test_any_status_can_follow_any_other(ledger, vehicle):
    booking = ledger.create(request_data(vehicle))

    for status in ("accepted", "pending", "rejected", "accepted", "rejected", "pending"):
        assert ledger.set_status(booking.pk, status).status == status
        assert ledger.get(booking.pk).status == status


@pytest.mark.django_db
def test_reason_is_kept_until_replaced(ledger, vehicle):
    booking = ledger.create(request_data(vehicle))

    ledger.set_status(booking.pk, "rejected", "no availability")
    assert ledger.get(booking.pk).rejection_reason == "no availability"

    reverted = ledger.set_status(booking.pk, "pending")
    assert reverted.status == "pending"
    assert ledger.get(booking.pk).rejection_reason == "no availability"

    ledger.set_status(booking.pk, "rejected", "vehicle in repair")
    assert ledger.get(booking.pk).rejection_reason == "vehicle in repair"


@pytest.mark.django_db
def test_status_change_touches_no_other_fields(ledger, vehicle):
    booking = ledger.create(request_data(vehicle))

    ledger.set_status(booking.pk, "accepted")
    stored = ledger.get(booking.pk)

    assert stored.pickup_date == booking.pickup_date
    assert stored.return_date == booking.return_date
    assert stored.email == booking.email
    assert stored.vehicle_id == vehicle.pk


@pytest.mark.django_db
def test_set_status_rejects_unknown_status_and_id(ledger, vehicle):
    booking = ledger.create(request_data(vehicle))

    with pytest.raises(ValidationError):
        ledger.set_status(booking.pk, "cancelled")
    with pytest.raises(BookingNotFound):
        ledger.set_status(4242, "accepted")

    assert ledger.get(booking.pk).status == "pending"
