"""Booking request models."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A customer's request to rent a vehicle, decided on by staff."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        ACCEPTED = "accepted", _("Accepted")
        REJECTED = "rejected", _("Rejected")

    vehicle = models.ForeignKey(
        "vehicles.Vehicle",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    vehicle_type = models.CharField(max_length=50)
    pickup_location = models.CharField(max_length=255)
    return_location = models.CharField(max_length=255)
    city = models.CharField(max_length=100, null=True, blank=True)
    pickup_date = models.DateTimeField()
    return_date = models.DateTimeField()
    name = models.CharField(max_length=150, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    rejection_reason = models.TextField(
        null=True,
        blank=True,
        help_text=_("Shown to the customer when the request is rejected."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(return_date__gt=models.F("pickup_date")),
                name="booking_return_after_pickup",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="booking_status_idx"),
            models.Index(fields=["email"], name="booking_email_idx"),
            models.Index(fields=["vehicle", "pickup_date", "return_date"], name="booking_vehicle_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} ({self.vehicle_type}, {self.status})"

    def clean(self) -> None:
        if self.pickup_date and self.return_date and self.return_date <= self.pickup_date:
            raise ValidationError({"return_date": _("Return date must be after pickup date.")})
