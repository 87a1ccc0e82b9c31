from datetime import datetime, timezone

import pytest
from django.core.exceptions import ValidationError

from apps.vehicles.models import AvailabilityWindow, Vehicle
from apps.vehicles.services import (
    DEGRADED_MESSAGE,
    AvailabilityWindowNotFound,
    AvailabilityWindowStore,
    OverlapResolver,
    VehicleCatalog,
)
from shared.domain.exceptions import DependencyUnavailable


def at(day, month=7):
    return datetime(2025, month, day, tzinfo=timezone.utc)


class UnprovisionedStore(AvailabilityWindowStore):
    def probe(self):
        return False


@pytest.fixture
def store():
    return AvailabilityWindowStore()


@pytest.fixture
def resolver(store):
    return OverlapResolver(store, VehicleCatalog())


@pytest.fixture
def sedan():
    return Vehicle.objects.create(name="Model S", vehicle_type="Sedan", city="Paris")


@pytest.fixture
def suv():
    return Vehicle.objects.create(name="X5", vehicle_type="SUV", city="Lyon")


def window(vehicle, start, end, available):
    return AvailabilityWindow.objects.create(
        vehicle=vehicle,
        start_date=start,
        end_date=end,
        is_available=available,
    )


@pytest.mark.django_db
def test_vehicle_without_windows_is_available(resolver, sedan):
    result = resolver.find_available(at(1), at(5))

    assert [vehicle.pk for vehicle in result.vehicles] == [sedan.pk]
    assert result.degraded is False
    assert result.message is None


@pytest.mark.django_db
def test_overlapping_unavailable_window_blocks_vehicle(resolver, sedan, suv):
    window(sedan, at(3), at(8), available=False)

    result = resolver.find_available(at(1), at(5))

    assert [vehicle.pk for vehicle in result.vehicles] == [suv.pk]


@pytest.mark.django_db
def test_non_overlapping_windows_are_ignored(resolver, sedan):
    window(sedan, at(10), at(15), available=False)
    window(sedan, at(20), at(25), available=True)

    result = resolver.find_available(at(1), at(5))

    assert [vehicle.pk for vehicle in result.vehicles] == [sedan.pk]


@pytest.mark.django_db
def test_retyped_vehicle_stays_blocked_under_new_type(resolver, sedan):
    window(sedan, at(10), at(20), available=False)

    sedan.vehicle_type = "SUV"
    sedan.save()

    assert AvailabilityWindow.objects.get(vehicle=sedan).vehicle_type == "SUV"
    assert resolver.find_available(at(15), at(16)).vehicles == []
    assert resolver.find_available(at(15), at(16), vehicle_type="SUV").vehicles == []


@pytest.mark.django_db
def test_retyping_keeps_unhinted_windows_unhinted(sedan):
    unhinted = window(sedan, at(10), at(20), available=False)
    AvailabilityWindow.objects.filter(pk=unhinted.pk).update(vehicle_type=None)

    sedan.vehicle_type = "SUV"
    sedan.save()

    assert AvailabilityWindow.objects.get(pk=unhinted.pk).vehicle_type is None


@pytest.mark.django_db
def test_touching_boundaries_do_not_overlap(resolver, sedan):
    window(sedan, at(5), at(10), available=False)
    window(sedan, at(1, month=6), at(1), available=False)

    result = resolver.find_available(at(1), at(5))

    assert [vehicle.pk for vehicle in result.vehicles] == [sedan.pk]


@pytest.mark.django_db
def test_available_window_does_not_override_unavailable_one(resolver, sedan):
    window(sedan, at(1), at(10), available=True)
    window(sedan, at(4), at(6), available=False)

    result = resolver.find_available(at(2), at(5))

    assert result.vehicles == []


@pytest.mark.django_db
def test_overlapping_available_window_keeps_vehicle(resolver, sedan):
    window(sedan, at(1), at(10), available=True)

    result = resolver.find_available(at(2), at(5))

    assert [vehicle.pk for vehicle in result.vehicles] == [sedan.pk]


@pytest.mark.django_db
def test_type_and_locale_filters(resolver, sedan, suv):
    assert [v.pk for v in resolver.find_available(at(1), at(5), vehicle_type="SUV").vehicles] == [suv.pk]
    assert [v.pk for v in resolver.find_available(at(1), at(5), locale="paris").vehicles] == [sedan.pk]
    assert len(resolver.find_available(at(1), at(5), vehicle_type="All Cars").vehicles) == 2
    assert resolver.find_available(at(1), at(5), vehicle_type="Van").vehicles == []


@pytest.mark.django_db
def test_reversed_period_is_rejected(resolver):
    with pytest.raises(ValidationError):
        resolver.find_available(at(5), at(1))
    with pytest.raises(ValidationError):
        resolver.find_available(at(5), at(5))


@pytest.mark.django_db
def test_unprovisioned_store_degrades_to_catalog(sedan, suv):
    window(sedan, at(1), at(10), available=False)
    resolver = OverlapResolver(UnprovisionedStore(), VehicleCatalog())

    result = resolver.find_available(at(2), at(5), vehicle_type="Sedan")

    assert result.degraded is True
    assert result.message == DEGRADED_MESSAGE
    assert [vehicle.pk for vehicle in result.vehicles] == [sedan.pk]


@pytest.mark.django_db
def test_single_vehicle_check_raises_when_store_is_down(sedan):
    resolver = OverlapResolver(UnprovisionedStore(), VehicleCatalog())

    with pytest.raises(DependencyUnavailable):
        resolver.is_vehicle_available(sedan.pk, at(1), at(5))


@pytest.mark.django_db
def test_single_vehicle_check(resolver, sedan):
    window(sedan, at(3), at(4), available=False)

    assert resolver.is_vehicle_available(sedan.pk, at(1), at(5)) is False
    assert resolver.is_vehicle_available(sedan.pk, at(4), at(9)) is True


@pytest.mark.django_db
def test_probe_detects_existing_table(store):
    assert store.probe() is True


@pytest.mark.django_db
def test_window_save_copies_vehicle_type(sedan):
    created = window(sedan, at(1), at(2), available=True)

    assert created.vehicle_type == "Sedan"


@pytest.mark.django_db
def test_window_rejects_reversed_dates(sedan):
    with pytest.raises(ValidationError):
        window(sedan, at(5), at(1), available=False)


@pytest.mark.django_db
def test_store_writes_and_lookup(store, sedan, suv):
    created = store.create({"vehicle": sedan, "start_date": at(1), "end_date": at(3), "is_available": False})
    assert store.get(created.pk).is_available is False

    updated = store.update(created, {"vehicle": suv})
    assert updated.vehicle_type == "SUV"

    store.delete(updated)
    with pytest.raises(AvailabilityWindowNotFound):
        store.get(created.pk)


@pytest.mark.django_db
def test_store_writes_fail_when_unprovisioned(sedan):
    with pytest.raises(DependencyUnavailable):
        UnprovisionedStore().create({"vehicle": sedan, "start_date": at(1), "end_date": at(3)})
