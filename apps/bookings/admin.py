"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "vehicle",
        "vehicle_type",
        "name",
        "email",
        "status",
        "pickup_date",
        "return_date",
        "created_at",
    )
    list_filter = ("status", "vehicle_type", "city", "pickup_date")
    search_fields = ("name", "email", "phone", "vehicle__name")
    readonly_fields = (
        "created_at",
        "updated_at",
    )
