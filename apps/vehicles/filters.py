"""FilterSet definitions for the vehicle catalog."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Vehicle
from .services import normalize_vehicle_type


class VehicleFilterSet(django_filters.FilterSet):
    """Catalog filters: ``?type=`` (``All Cars`` disables it) and ``?city=``."""

    type = django_filters.CharFilter(method="filter_type")
    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")
    seats_min = django_filters.NumberFilter(field_name="seats", lookup_expr="gte")

    class Meta:
        model = Vehicle
        fields: list[str] = []

    def filter_type(self, queryset, name, value):  # type: ignore
        vehicle_type = normalize_vehicle_type(value)
        if not vehicle_type:
            return queryset
        return queryset.filter(vehicle_type=vehicle_type)
