from datetime import datetime, timezone
from unittest import mock

import pytest
from django.core import mail

from apps.bookings.models import Booking
from apps.notifications.services import (
    EmailNotificationDispatcher,
    NotificationError,
    build_status_email,
    send_booking_status_email,
)
from apps.notifications.tasks import send_booking_status_email_task
from apps.vehicles.models import Vehicle


@pytest.fixture
def booking():
    vehicle = Vehicle.objects.create(name="Model S", vehicle_type="Sedan")
    return Booking.objects.create(
        vehicle=vehicle,
        vehicle_type="Sedan",
        pickup_location="Airport",
        return_location="Central Station",
        city="Paris",
        pickup_date=datetime(2025, 7, 1, 10, tzinfo=timezone.utc),
        return_date=datetime(2025, 7, 4, 10, tzinfo=timezone.utc),
        name="Alex Doe",
        email="alex@example.com",
    )


@pytest.mark.django_db
def test_templates_per_status(booking):
    subject, html = build_status_email(booking, "accepted")
    assert subject == f"Your Vehicle Rental Booking #{booking.pk} has been Confirmed"
    assert "Model S" in html
    assert "Paris" in html

    subject, html = build_status_email(booking, "rejected", "<b>no cars</b>")
    assert "declined" in html
    assert "&lt;b&gt;no cars&lt;/b&gt;" in html

    subject, html = build_status_email(booking, "pending")
    assert "updated to: <strong>pending</strong>" in html


@pytest.mark.django_db
def test_template_falls_back_to_requested_type(booking):
    booking.vehicle = None

    _, html = build_status_email(booking, "accepted")

    assert "Sedan" in html


@pytest.mark.django_db
def test_sends_email(booking):
    assert send_booking_status_email(booking, "accepted") is True

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.to == ["alex@example.com"]
    assert message.alternatives[0][1] == "text/html"


@pytest.mark.django_db
def test_skips_booking_without_email(booking):
    booking.email = None

    assert send_booking_status_email(booking, "accepted") is False
    assert mail.outbox == []


@pytest.mark.django_db
def test_transport_failure_raises_notification_error(booking):
    with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("connection refused")):
        with pytest.raises(NotificationError):
            send_booking_status_email(booking, "accepted")


@pytest.mark.django_db
def test_dispatcher_sends_inline(booking):
    EmailNotificationDispatcher(use_queue=False).dispatch(booking, "rejected", "no cars")

    assert len(mail.outbox) == 1
    assert "no cars" in mail.outbox[0].body


@pytest.mark.django_db
def test_dispatcher_enqueues_task(booking):
    with mock.patch.object(send_booking_status_email_task, "delay") as delay:
        EmailNotificationDispatcher(use_queue=True).dispatch(booking, "accepted")

    delay.assert_called_once_with(booking.pk, "accepted", None)


@pytest.mark.django_db
def test_broker_failure_raises_notification_error(booking):
    with mock.patch.object(send_booking_status_email_task, "delay", side_effect=ConnectionError("broker down")):
        with pytest.raises(NotificationError):
            EmailNotificationDispatcher(use_queue=True).dispatch(booking, "accepted")


@pytest.mark.django_db
def test_dispatcher_follows_setting(settings):
    settings.BOOKING_NOTIFICATIONS_ASYNC = True
    assert EmailNotificationDispatcher().use_queue is True

    settings.BOOKING_NOTIFICATIONS_ASYNC = False
    assert EmailNotificationDispatcher().use_queue is False


@pytest.mark.django_db
def test_task_sends_email(booking):
    assert send_booking_status_email_task(booking.pk, "accepted") is True
    assert len(mail.outbox) == 1


@pytest.mark.django_db
def test_task_ignores_deleted_booking():
    assert send_booking_status_email_task(4242, "accepted") is False
    assert mail.outbox == []
