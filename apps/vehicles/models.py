"""Vehicle catalog and availability window models."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models, transaction  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class Vehicle(models.Model):
    """A rentable vehicle. Managed through the admin; read-only for the API."""

    name = models.CharField(max_length=100)
    vehicle_type = models.CharField(max_length=50, db_index=True)
    seats = models.PositiveSmallIntegerField(default=4)
    power = models.CharField(max_length=50, blank=True)
    rating = models.DecimalField(max_digits=3, decimal_places=1, null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    city = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text=_("City where the vehicle can be picked up."),
    )
    image = models.CharField(max_length=500, null=True, blank=True)
    special = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text=_("Promotional label shown next to the vehicle."),
    )
    description = models.TextField(null=True, blank=True)
    features = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.vehicle_type})"

    def save(self, *args, **kwargs):  # type: ignore
        using = kwargs.get("using") or "default"
        previous_type = None
        if self.pk is not None:
            previous_type = (
                Vehicle.objects.using(using)
                .filter(pk=self.pk)
                .values_list("vehicle_type", flat=True)
                .first()
            )
        with transaction.atomic(using=using):
            super().save(*args, **kwargs)
            # Windows carry a copy of the type; keep copies in step with a retyped vehicle.
            if previous_type is not None and previous_type != self.vehicle_type:
                self.availability_windows.filter(vehicle_type=previous_type).update(
                    vehicle_type=self.vehicle_type
                )


class AvailabilityWindow(models.Model):
    """A staff-defined period [start_date, end_date) marking a vehicle available or not."""

    vehicle = models.ForeignKey(
        Vehicle,
        on_delete=models.CASCADE,
        related_name="availability_windows",
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    is_available = models.BooleanField(default=True)
    vehicle_type = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text=_("Copy of the vehicle type used to narrow availability queries."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Availability window")
        verbose_name_plural = _("Availability windows")
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="window_end_after_start",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "start_date", "end_date"], name="window_vehicle_dates_idx"),
        ]

    def __str__(self) -> str:
        state = "available" if self.is_available else "unavailable"
        return f"{self.vehicle_id}: {self.start_date} - {self.end_date} ({state})"

    @property
    def period(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def clean(self) -> None:
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({"end_date": _("End date must be after start date.")})

    def save(self, *args, **kwargs):  # type: ignore
        if not self.vehicle_type and self.vehicle_id:
            self.vehicle_type = self.vehicle.vehicle_type
        self.clean()
        super().save(*args, **kwargs)
