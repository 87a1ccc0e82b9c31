"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.permissions import IsPrivilegedUser
from shared.api.responses import envelope, error_envelope

from .application.command_handlers import TransitionBookingCommand, build_lifecycle_coordinator
from .serializers import BookingCreateSerializer, BookingSerializer, BookingStatusUpdateSerializer
from .services import BookingLedger


class BookingViewSet(viewsets.GenericViewSet):
    """Booking requests: customers create and look up, staff list and decide."""

    serializer_class = BookingSerializer

    def get_permissions(self):  # type: ignore
        if self.action in ("list", "update_status"):
            return [IsPrivilegedUser()]
        return [permissions.AllowAny()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update_status":
            return BookingStatusUpdateSerializer
        return BookingSerializer

    def get_ledger(self) -> BookingLedger:
        return BookingLedger()

    def get_coordinator(self):  # type: ignore
        return build_lifecycle_coordinator()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(
            envelope(BookingSerializer(booking).data, message="Booking created successfully"),
            status=status.HTTP_201_CREATED,
        )

    def list(self, request, *args, **kwargs):  # type: ignore
        bookings = self.get_ledger().list_all()
        return Response(envelope(BookingSerializer(bookings, many=True).data))

    def retrieve(self, request, pk=None):  # type: ignore
        booking = self.get_ledger().get(pk)
        return Response(envelope(BookingSerializer(booking).data))

    @action(detail=False, methods=["get"], url_path="customer")
    def customer(self, request):  # type: ignore
        email = request.query_params.get("email")
        if not email:
            return Response(
                error_envelope("Email is required", error="validation_error"),
                status=status.HTTP_400_BAD_REQUEST,
            )
        bookings = self.get_ledger().list_by_requester_email(email)
        return Response(envelope(BookingSerializer(bookings, many=True).data))

    @action(detail=True, methods=["patch"], url_path="status", url_name="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = TransitionBookingCommand(
            booking_id=pk,
            status=serializer.validated_data["status"],
            reason=serializer.validated_data.get("rejection_reason"),
        )
        booking = self.get_coordinator().handle(command)
        return Response(envelope(BookingSerializer(booking).data, message="Booking status updated successfully"))
