"""URL routing for the vehicles domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AvailabilityWindowViewSet, AvailableVehiclesView, VehicleViewSet

router = DefaultRouter()
router.register(r"", VehicleViewSet, basename="vehicle")

window_list = AvailabilityWindowViewSet.as_view({"get": "list", "post": "create"})
window_detail = AvailabilityWindowViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "delete": "destroy"}
)
vehicle_windows = AvailabilityWindowViewSet.as_view({"get": "list"})

# Explicit paths first: the router's detail route would otherwise match them.
urlpatterns = [
    path("available/", AvailableVehiclesView.as_view(), name="vehicle-available"),
    path("availability/", window_list, name="availability-window-list"),
    path("availability/<int:pk>/", window_detail, name="availability-window-detail"),
    path("<int:vehicle_id>/availability/", vehicle_windows, name="vehicle-availability"),
    path("", include(router.urls)),
]
