"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.vehicles.models import Vehicle
from shared.api.fields import NullableCharField, NullableEmailField

from .models import Booking
from .services import BookingLedger


class BookingCreateSerializer(serializers.Serializer):
    """Booking request placed by a customer; always stored as pending."""

    vehicleId = serializers.PrimaryKeyRelatedField(
        source="vehicle",
        queryset=Vehicle.objects.all(),
        required=False,
        allow_null=True,
    )
    vehicleType = NullableCharField(source="vehicle_type", max_length=50)
    pickupLocation = serializers.CharField(source="pickup_location", max_length=255)
    returnLocation = serializers.CharField(source="return_location", max_length=255)
    city = NullableCharField(max_length=100)
    pickupDate = serializers.DateTimeField(source="pickup_date")
    returnDate = serializers.DateTimeField(source="return_date")
    name = NullableCharField(max_length=150)
    email = NullableEmailField()
    phone = NullableCharField(max_length=32)

    def validate(self, attrs):  # type: ignore
        if attrs["return_date"] <= attrs["pickup_date"]:
            raise serializers.ValidationError({"returnDate": ["Return date must be after pickup date."]})

        vehicle = attrs.get("vehicle")
        if not attrs.get("vehicle_type"):
            if vehicle is None:
                raise serializers.ValidationError(
                    {"vehicleType": ["Vehicle type is required when no vehicle is selected."]}
                )
            attrs["vehicle_type"] = vehicle.vehicle_type
        return attrs

    def create(self, validated_data):  # type: ignore
        ledger = self.context.get("ledger") or BookingLedger()
        return ledger.create(validated_data)


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking."""

    vehicleId = serializers.ReadOnlyField(source="vehicle_id")
    vehicleName = serializers.SerializerMethodField()
    vehicleType = serializers.ReadOnlyField(source="vehicle_type")
    pickupLocation = serializers.ReadOnlyField(source="pickup_location")
    returnLocation = serializers.ReadOnlyField(source="return_location")
    pickupDate = serializers.DateTimeField(source="pickup_date", read_only=True)
    returnDate = serializers.DateTimeField(source="return_date", read_only=True)
    rejectionReason = serializers.ReadOnlyField(source="rejection_reason")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "vehicleId",
            "vehicleName",
            "vehicleType",
            "pickupLocation",
            "returnLocation",
            "city",
            "pickupDate",
            "returnDate",
            "name",
            "email",
            "phone",
            "status",
            "rejectionReason",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_vehicleName(self, obj: Booking) -> str | None:
        return obj.vehicle.name if obj.vehicle_id and obj.vehicle else None


class BookingStatusUpdateSerializer(serializers.Serializer):
    """Body of ``PATCH /bookings/{id}/status/``."""

    status = serializers.ChoiceField(
        choices=Booking.Status.choices,
        error_messages={"required": "Status is required"},
    )
    rejectionReason = NullableCharField(source="rejection_reason")

    def validate(self, attrs):  # type: ignore
        if attrs["status"] != Booking.Status.REJECTED:
            # A reason only belongs to a rejection; other statuses keep the stored one.
            attrs.pop("rejection_reason", None)
        elif not attrs.get("rejection_reason"):
            raise serializers.ValidationError(
                {"rejectionReason": ["A reason is required when rejecting a booking."]}
            )
        return attrs
