"""Domain services for vehicle availability.

``AvailabilityWindowStore`` wraps the window table, ``VehicleCatalog`` the
vehicle table, and ``OverlapResolver`` combines both to answer "which
vehicles can be booked for [start, end)?".

Availability rule: a vehicle is bookable unless some window overlapping
the requested period marks it unavailable. Vehicles without windows, or
whose windows all lie outside the period, are bookable. An overlapping
available window never overrides an overlapping unavailable one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Any, Iterable, Mapping

from django.core.exceptions import ValidationError  # type: ignore
from django.db import DatabaseError, connections, transaction  # type: ignore
from django.db.models import Q  # type: ignore

from shared.domain.exceptions import DependencyUnavailable, NotFoundError
from shared.domain.value_objects import DateRange

from .models import AvailabilityWindow, Vehicle

logger = logging.getLogger(__name__)

# Sent by the public site's type selector; means "no type filter".
ALL_VEHICLE_TYPES = "All Cars"

DEGRADED_MESSAGE = (
    "Availability temporarily unavailable: showing all matching vehicles "
    "without checking their availability windows."
)


class AvailabilityWindowNotFound(NotFoundError):
    def __init__(self, window_id: Any):
        super().__init__(f"Availability window with ID {window_id} not found")
        self.window_id = window_id


def normalize_vehicle_type(vehicle_type: str | None) -> str | None:
    if not vehicle_type or vehicle_type == ALL_VEHICLE_TYPES:
        return None
    return vehicle_type


def requested_period(start_date: datetime, end_date: datetime) -> DateRange:
    """Validated query period; a reversed or empty range is a validation error."""
    try:
        return DateRange(start_date, end_date)
    except ValueError as exc:
        raise ValidationError({"end_date": [str(exc)]}) from exc


def blocked_vehicle_ids(windows: Iterable[AvailabilityWindow], period: DateRange) -> set[int]:
    """Vehicles with at least one unavailable window overlapping ``period``."""
    return {
        window.vehicle_id
        for window in windows
        if not window.is_available and window.period.overlaps_with(period)
    }


@dataclass
class AvailabilityResult:
    """Resolver answer; ``degraded`` means windows could not be consulted."""

    vehicles: list[Vehicle] = field(default_factory=list)
    degraded: bool = False
    message: str | None = None


class VehicleCatalog:
    """Read-only access to the vehicle catalog."""

    def __init__(self, using: str = "default"):
        self.using = using

    def list(self, vehicle_type: str | None = None, locale: str | None = None) -> list[Vehicle]:
        queryset = Vehicle.objects.using(self.using).order_by("id")
        vehicle_type = normalize_vehicle_type(vehicle_type)
        if vehicle_type:
            queryset = queryset.filter(vehicle_type=vehicle_type)
        if locale:
            queryset = queryset.filter(city__iexact=locale)
        return list(queryset)


class AvailabilityWindowStore:
    """
    Repository for availability windows.

    Whether the window table exists is probed once per store and cached, so
    an unprovisioned deployment costs one introspection query rather than a
    failed query per call. Both a missing table and database errors surface
    as ``DependencyUnavailable``.
    """

    def __init__(self, using: str = "default"):
        self.using = using
        self._provisioned: bool | None = None

    def probe(self) -> bool:
        if self._provisioned is not None:
            return self._provisioned

        connection = connections[self.using]
        try:
            with connection.cursor() as cursor:
                tables = connection.introspection.table_names(cursor)
        except DatabaseError as exc:
            # Not cached: the database itself may come back.
            logger.warning(f"Availability store probe failed: {exc}")
            return False

        self._provisioned = AvailabilityWindow._meta.db_table in tables
        if not self._provisioned:
            logger.warning(
                f"Table {AvailabilityWindow._meta.db_table} is missing; "
                "availability queries will run in degraded mode"
            )
        return self._provisioned

    def _require_provisioned(self) -> None:
        if not self.probe():
            raise DependencyUnavailable("Availability windows store is not available.")

    def _queryset(self):  # type: ignore
        return AvailabilityWindow.objects.using(self.using).select_related("vehicle")

    def _fetch(self, queryset) -> list[AvailabilityWindow]:  # type: ignore
        self._require_provisioned()
        try:
            return list(queryset)
        except DatabaseError as exc:
            raise DependencyUnavailable(f"Availability windows store query failed: {exc}") from exc

    def overlapping(
        self,
        period: DateRange,
        *,
        vehicle_type: str | None = None,
        vehicle_ids: Iterable[int] | None = None,
    ) -> list[AvailabilityWindow]:
        """Windows overlapping ``period``; with a type, only windows hinted for it or unhinted."""
        queryset = self._queryset().filter(start_date__lt=period.end_date, end_date__gt=period.start_date)
        vehicle_type = normalize_vehicle_type(vehicle_type)
        if vehicle_type:
            queryset = queryset.filter(Q(vehicle_type__isnull=True) | Q(vehicle_type=vehicle_type))
        if vehicle_ids is not None:
            queryset = queryset.filter(vehicle_id__in=list(vehicle_ids))
        return self._fetch(queryset)

    def all(self) -> list[AvailabilityWindow]:
        return self._fetch(self._queryset().order_by("start_date", "id"))

    def for_vehicle(self, vehicle_id: int) -> list[AvailabilityWindow]:
        return self._fetch(self._queryset().filter(vehicle_id=vehicle_id).order_by("start_date", "id"))

    def get(self, window_id: Any) -> AvailabilityWindow:
        self._require_provisioned()
        try:
            return self._queryset().get(pk=window_id)
        except AvailabilityWindow.DoesNotExist:
            raise AvailabilityWindowNotFound(window_id)
        except DatabaseError as exc:
            raise DependencyUnavailable(f"Availability windows store query failed: {exc}") from exc

    def create(self, data: Mapping[str, Any]) -> AvailabilityWindow:
        self._require_provisioned()
        window = AvailabilityWindow(**data)
        try:
            with transaction.atomic(using=self.using):
                window.save(using=self.using)
        except DatabaseError as exc:
            raise DependencyUnavailable(f"Could not save availability window: {exc}") from exc
        logger.info(
            f"Created availability window {window.pk} for vehicle {window.vehicle_id}: "
            f"{window.period} available={window.is_available}"
        )
        return window

    def update(self, window: AvailabilityWindow, data: Mapping[str, Any]) -> AvailabilityWindow:
        self._require_provisioned()
        changes = dict(data)
        # Moving a window to another vehicle re-derives its type hint.
        if "vehicle" in changes and "vehicle_type" not in changes and changes["vehicle"] != window.vehicle:
            changes["vehicle_type"] = changes["vehicle"].vehicle_type
        for name, value in changes.items():
            setattr(window, name, value)
        try:
            with transaction.atomic(using=self.using):
                window.save(using=self.using)
        except DatabaseError as exc:
            raise DependencyUnavailable(f"Could not update availability window: {exc}") from exc
        logger.info(f"Updated availability window {window.pk}: {sorted(changes)}")
        return window

    def delete(self, window: AvailabilityWindow) -> None:
        self._require_provisioned()
        window_id = window.pk
        try:
            with transaction.atomic(using=self.using):
                window.delete(using=self.using)
        except DatabaseError as exc:
            raise DependencyUnavailable(f"Could not delete availability window: {exc}") from exc
        logger.info(f"Deleted availability window {window_id}")


class OverlapResolver:
    """Computes which vehicles may be booked for a period."""

    def __init__(self, window_store: AvailabilityWindowStore, catalog: VehicleCatalog):
        self.window_store = window_store
        self.catalog = catalog

    def find_available(
        self,
        start_date: datetime,
        end_date: datetime,
        vehicle_type: str | None = None,
        locale: str | None = None,
    ) -> AvailabilityResult:
        period = requested_period(start_date, end_date)
        vehicles = self.catalog.list(vehicle_type, locale)

        try:
            windows = self.window_store.overlapping(period, vehicle_type=vehicle_type)
        except DependencyUnavailable as exc:
            logger.warning(f"Serving degraded availability for {period}: {exc}")
            return AvailabilityResult(vehicles=vehicles, degraded=True, message=DEGRADED_MESSAGE)

        blocked = blocked_vehicle_ids(windows, period)
        available = [vehicle for vehicle in vehicles if vehicle.pk not in blocked]
        logger.debug(f"{len(available)} of {len(vehicles)} vehicles available for {period}")
        return AvailabilityResult(vehicles=available)

    def is_vehicle_available(self, vehicle_id: int, start_date: datetime, end_date: datetime) -> bool:
        """Single-vehicle check. Raises ``DependencyUnavailable`` instead of degrading."""
        period = requested_period(start_date, end_date)
        windows = self.window_store.overlapping(period, vehicle_ids=[vehicle_id])
        return vehicle_id not in blocked_vehicle_ids(windows, period)


@lru_cache(maxsize=None)
def default_window_store() -> AvailabilityWindowStore:
    """Process-wide store so the provisioning probe runs once."""
    return AvailabilityWindowStore()


def build_overlap_resolver() -> OverlapResolver:
    return OverlapResolver(default_window_store(), VehicleCatalog())
