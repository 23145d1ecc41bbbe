from __future__ import annotations

import itertools
from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from pyfleet.exceptions import FleetStateError
from pyfleet.models.driver import Driver, DriverStatus
from pyfleet.sample_data import sample_drivers
from pyfleet.state.drivers import DriverStore


def _dt() -> datetime:
    return datetime(2026, 1, 1, 9, tzinfo=UTC)


def _store() -> DriverStore:
    counter = itertools.count(10)
    return DriverStore(sample_drivers(_dt()), clock=_dt, id_factory=lambda: str(next(counter)))


# ------------------------------------------------------------------
# Model
# ------------------------------------------------------------------


class TestDriver:
    def test_defaults(self) -> None:
        driver = Driver(id="d1", name="Nina")
        assert driver.status == DriverStatus.AVAILABLE
        assert driver.safety_score == 100
        assert driver.assigned_vehicle_id is None

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Driver(id="d1", name="  ")

    def test_safety_score_bounded(self) -> None:
        with pytest.raises(ValidationError):
            Driver(id="d1", name="Nina", safety_score=101)

    def test_license_expired(self) -> None:
        driver = Driver.model_validate({"id": "d1", "name": "Nina", "licenseExpiry": "2025-08-20"})
        assert driver.license_expired(date(2026, 1, 1))
        assert not driver.license_expired(date(2025, 8, 20))
        assert not Driver(id="d2", name="Luka").license_expired(date(2026, 1, 1))


# ------------------------------------------------------------------
# Store
# ------------------------------------------------------------------


def test_sample_roster() -> None:
    store = _store()
    assert [d.name for d in store.drivers()] == ["Grega Novak", "Marko Horvat", "Ana Krajnc"]
    assert store.driver_for("1").id == "1"  # type: ignore[union-attr]
    assert store.driver_for("2") is None


def test_two_drivers_on_one_vehicle_rejected() -> None:
    with pytest.raises(FleetStateError):
        DriverStore(
            [
                Driver(id="a", name="A", assigned_vehicle_id="1"),
                Driver(id="b", name="B", assigned_vehicle_id="1"),
            ]
        )


def test_create_driver_appends_with_zeroed_counters() -> None:
    store = _store()
    driver = store.create_driver(name="Luka Zupan", id="mine", total_trips=50, total_distance=999, safety_score=80)

    assert driver.id == "10"
    assert (driver.total_trips, driver.total_distance) == (0, 0)
    assert driver.safety_score == 80
    assert driver.created_at == _dt()
    assert [d.id for d in store.drivers()] == ["1", "2", "3", "10"]


def test_create_driver_on_taken_vehicle_rejected() -> None:
    store = _store()
    with pytest.raises(FleetStateError):
        store.create_driver(name="Luka Zupan", assigned_vehicle_id="3")
    assert len(store) == 3


def test_update_driver() -> None:
    store = _store()
    assert store.update_driver("2", phone="+386 41 000 000", status="off_duty")
    driver = store.get("2")
    assert driver is not None
    assert driver.phone == "+386 41 000 000"
    assert driver.status == DriverStatus.OFF_DUTY
    assert driver.updated_at == _dt()
    assert store.update_driver("missing", phone="x") is False


def test_update_cannot_steal_vehicle() -> None:
    store = _store()
    with pytest.raises(FleetStateError):
        store.update_driver("2", assigned_vehicle_id="1")
    assert store.get("2").assigned_vehicle_id is None  # type: ignore[union-attr]


def test_delete_driver() -> None:
    store = _store()
    assert store.delete_driver("2")
    assert store.delete_driver("2") is False
    assert len(store) == 2


class TestAssignVehicle:
    def test_takes_vehicle_from_previous_driver(self) -> None:
        store = _store()
        assert store.assign_vehicle("2", "1")

        previous = store.get("1")
        current = store.get("2")
        assert previous is not None and current is not None
        assert previous.assigned_vehicle_id is None
        assert previous.status == DriverStatus.AVAILABLE
        assert current.assigned_vehicle_id == "1"
        assert current.status == DriverStatus.ON_TRIP
        assert store.driver_for("1") == current

    def test_unassign(self) -> None:
        store = _store()
        assert store.assign_vehicle("3", None)
        driver = store.get("3")
        assert driver is not None
        assert driver.assigned_vehicle_id is None
        assert driver.status == DriverStatus.AVAILABLE
        assert store.driver_for("3") is None

    def test_moving_driver_to_another_vehicle(self) -> None:
        store = _store()
        assert store.assign_vehicle("1", "5")
        assert store.driver_for("1") is None
        assert store.driver_for("5").id == "1"  # type: ignore[union-attr]

    def test_unknown_driver_changes_nothing(self) -> None:
        store = _store()
        assert store.assign_vehicle("missing", "1") is False
        assert store.driver_for("1").id == "1"  # type: ignore[union-attr]

    def test_one_driver_per_vehicle_holds(self) -> None:
        store = _store()
        for driver_id, vehicle_id in [("2", "1"), ("3", "1"), ("1", "3"), ("2", "3")]:
            store.assign_vehicle(driver_id, vehicle_id)
            assigned = [d.assigned_vehicle_id for d in store.drivers() if d.assigned_vehicle_id]
            assert len(assigned) == len(set(assigned))


def test_status_counts_and_average_safety() -> None:
    store = _store()
    assert store.status_counts() == {"all": 3, "available": 1, "on_trip": 2, "off_duty": 0, "suspended": 0}
    assert store.average_safety_score() == pytest.approx((87 + 92 + 95) / 3)
    assert DriverStore().average_safety_score() is None
