"""Serializers for the vehicle catalog and availability windows."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.api.fields import NullableCharField

from .models import AvailabilityWindow, Vehicle


class VehicleSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="vehicle_type", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            "id",
            "name",
            "type",
            "seats",
            "power",
            "rating",
            "price",
            "city",
            "image",
            "special",
            "description",
            "features",
            "createdAt",
        ]
        read_only_fields = fields


class AvailableVehiclesQuerySerializer(serializers.Serializer):
    """Query string of ``GET /vehicles/available/``."""

    startDate = serializers.DateTimeField()
    endDate = serializers.DateTimeField()
    type = NullableCharField(max_length=50)
    locale = NullableCharField(max_length=100)

    def validate(self, attrs):  # type: ignore
        if attrs["endDate"] <= attrs["startDate"]:
            raise serializers.ValidationError({"endDate": ["End date must be after start date."]})
        return attrs


class AvailabilityWindowSerializer(serializers.ModelSerializer):
    """Read/write representation of a window; writes go through the window store."""

    vehicleId = serializers.PrimaryKeyRelatedField(source="vehicle", queryset=Vehicle.objects.all())
    vehicleName = serializers.CharField(source="vehicle.name", read_only=True)
    startDate = serializers.DateTimeField(source="start_date")
    endDate = serializers.DateTimeField(source="end_date")
    isAvailable = serializers.BooleanField(source="is_available", default=True)
    vehicleType = NullableCharField(source="vehicle_type", max_length=50)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = AvailabilityWindow
        fields = [
            "id",
            "vehicleId",
            "vehicleName",
            "startDate",
            "endDate",
            "isAvailable",
            "vehicleType",
            "createdAt",
            "updatedAt",
        ]

    def validate(self, attrs):  # type: ignore
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end <= start:
            raise serializers.ValidationError({"endDate": ["End date must be after start date."]})
        return attrs
