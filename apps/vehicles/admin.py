"""Admin registrations for the vehicles domain."""

from __future__ import annotations

from django.contrib import admin

from .models import AvailabilityWindow, Vehicle


class AvailabilityWindowInline(admin.TabularInline):
    model = AvailabilityWindow
    extra = 0
    fields = ("start_date", "end_date", "is_available", "vehicle_type")


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("name", "vehicle_type", "seats", "city", "price", "created_at")
    list_filter = ("vehicle_type", "city")
    search_fields = ("name", "vehicle_type", "city")
    inlines = [AvailabilityWindowInline]


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    list_display = ("vehicle", "start_date", "end_date", "is_available", "vehicle_type")
    list_filter = ("is_available", "vehicle_type")
    search_fields = ("vehicle__name",)
    readonly_fields = ("created_at", "updated_at")
