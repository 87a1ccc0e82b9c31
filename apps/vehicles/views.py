"""API views for the vehicle catalog, availability search and window management."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.api.permissions import IsPrivilegedUser
from shared.api.responses import envelope

from .filters import VehicleFilterSet
from .models import Vehicle
from .serializers import (
    AvailabilityWindowSerializer,
    AvailableVehiclesQuerySerializer,
    VehicleSerializer,
)
from .services import build_overlap_resolver, default_window_store


class VehicleViewSet(viewsets.ReadOnlyModelViewSet):
    """Public, read-only catalog."""

    queryset = Vehicle.objects.all().order_by("id")
    serializer_class = VehicleSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = VehicleFilterSet

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(envelope(serializer.data))

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_object())
        return Response(envelope(serializer.data))


class AvailableVehiclesView(APIView):
    """Vehicles bookable for ``[startDate, endDate)``; degraded answers are still 200."""

    permission_classes = [permissions.AllowAny]

    def get_resolver(self):  # type: ignore
        return build_overlap_resolver()

    def get(self, request):  # type: ignore
        query = AvailableVehiclesQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = self.get_resolver().find_available(
            params["startDate"],
            params["endDate"],
            vehicle_type=params.get("type"),
            locale=params.get("locale"),
        )
        data = VehicleSerializer(result.vehicles, many=True).data
        message = result.message or f"{len(result.vehicles)} vehicle(s) available"
        return Response(envelope(data, message=message, degraded=result.degraded), status=status.HTTP_200_OK)


class AvailabilityWindowViewSet(viewsets.GenericViewSet):
    """Staff CRUD over availability windows. Writes fail loudly when the store is down."""

    serializer_class = AvailabilityWindowSerializer
    permission_classes = [IsPrivilegedUser]

    def get_window_store(self):  # type: ignore
        return default_window_store()

    def list(self, request, vehicle_id=None):  # type: ignore
        store = self.get_window_store()
        if vehicle_id is not None:
            if not Vehicle.objects.filter(pk=vehicle_id).exists():
                raise NotFound(f"Vehicle with ID {vehicle_id} not found")
            windows = store.for_vehicle(vehicle_id)
        else:
            windows = store.all()
        return Response(envelope(self.get_serializer(windows, many=True).data))

    def retrieve(self, request, pk=None):  # type: ignore
        window = self.get_window_store().get(pk)
        return Response(envelope(self.get_serializer(window).data))

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        window = self.get_window_store().create(serializer.validated_data)
        return Response(
            envelope(self.get_serializer(window).data, message="Availability window created successfully"),
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, pk=None):  # type: ignore
        store = self.get_window_store()
        window = store.get(pk)
        serializer = self.get_serializer(window, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        window = store.update(window, serializer.validated_data)
        return Response(envelope(self.get_serializer(window).data, message="Availability window updated successfully"))

    def destroy(self, request, pk=None):  # type: ignore
        store = self.get_window_store()
        store.delete(store.get(pk))
        return Response(envelope(message="Availability window deleted successfully"))
