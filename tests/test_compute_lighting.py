from __future__ import annotations

import math
from dataclasses import replace

import pytest

from lumenplan import LightingInputError, compute_lighting
from lumenplan.database.catalog import default_catalog
from lumenplan.models.room import ContaminationLevel, LightingRequirements, RoomDimensions
from lumenplan.project.presets import default_requirements, default_room


def test_reference_scenario() -> None:
    room = default_room()
    req = default_requirements()
    out = compute_lighting(room, req)
    res = out.results

    assert res.room_cavity_ratio == pytest.approx(2.41875)
    assert 0.3 <= res.coefficient_of_utilization <= 0.85
    assert res.maintenance_factor == 0.84
    expected_n = math.ceil(500 * 80 / (3600 * res.coefficient_of_utilization * 0.84))
    assert res.number_of_lamps == expected_n == 20
    assert (res.layout.rows, res.layout.columns) == (4, 5)
    assert len(out.lamp_positions) == 20
    assert len(out.illuminance_grid) == 400
    assert out.illuminance_array.shape == (20, 20)
    assert res.illuminance_distribution.average >= 500.0
    assert res.energy_metrics.total_power == pytest.approx(720.0)
    assert res.energy_metrics.efficiency_rating == "Good"


def test_dirty_six_year_maintenance_factor() -> None:
    req = replace(default_requirements(), contamination_level=ContaminationLevel.DIRTY, maintenance_interval=6)
    assert compute_lighting(default_room(), req).results.maintenance_factor == 0.62


def test_catalog_wattage_used_when_flux_matches() -> None:
    catalog = default_catalog()
    req = replace(default_requirements(), flux_per_lamp=1600.0)
    out = compute_lighting(default_room(), req, catalog=catalog)
    energy = out.results.energy_metrics
    assert energy.fixture_label == "Incandescent (100W)"
    assert energy.watts_per_lamp == 100.0
    assert out.results.bill_of_materials[0].name == "Incandescent (100W)"
    catalog.close()


def test_catalog_miss_falls_back_to_efficacy() -> None:
    catalog = default_catalog()
    req = replace(default_requirements(), flux_per_lamp=5000.0)
    energy = compute_lighting(default_room(), req, catalog=catalog).results.energy_metrics
    assert energy.fixture_label is None
    assert energy.watts_per_lamp == pytest.approx(50.0)
    catalog.close()


ROOMS = [
    RoomDimensions(10.0, 8.0, 3.0, 0.85),
    RoomDimensions(2.0, 1.5, 2.4, 0.75),
    RoomDimensions(40.0, 6.0, 6.0, 0.0),
    RoomDimensions(3.0, 25.0, 3.5, 0.9),
    RoomDimensions(15.0, 15.0, 9.0, 1.0),
]

REQUIREMENTS = [
    default_requirements(),
    LightingRequirements(50.0, 15000.0, ContaminationLevel.VERY_CLEAN, 1, 0.9, 0.9),
    LightingRequirements(1500.0, 800.0, ContaminationLevel.DIRTY, 6, 0.0, 0.0),
    LightingRequirements(300.0, 2400.0, "clean", 4, 1.0, 0.1),
]


@pytest.mark.parametrize("room", ROOMS)
@pytest.mark.parametrize("req", REQUIREMENTS)
def test_invariants_hold_for_valid_inputs(room, req) -> None:
    out = compute_lighting(room, req)
    res = out.results
    assert res.number_of_lamps >= 1
    assert res.layout.rows * res.layout.columns >= res.number_of_lamps
    assert 0.3 <= res.coefficient_of_utilization <= 0.85
    dist = res.illuminance_distribution
    assert dist.minimum <= dist.average <= dist.maximum
    assert dist.uniformity == pytest.approx(dist.minimum / dist.average)
    assert 0.0 < dist.uniformity <= 1.0
    assert len(out.lamp_positions) == res.number_of_lamps
    for p in out.lamp_positions:
        assert 0.0 <= p.x <= room.length
        assert 0.0 <= p.y <= room.width
        assert p.z > room.workplane_height
    assert all(math.isfinite(g.illuminance) and g.illuminance > 0 for g in out.illuminance_grid)


def test_repeated_runs_are_identical() -> None:
    room = RoomDimensions(7.3, 5.1, 2.9, 0.8)
    req = LightingRequirements(420.0, 2800.0, "normal", 3, 0.65, 0.45)
    first = compute_lighting(room, req)
    second = compute_lighting(room, req)
    assert first.to_dict() == second.to_dict()


def test_more_target_lux_never_fewer_lamps() -> None:
    room = default_room()
    counts = [
        compute_lighting(room, replace(default_requirements(), target_illuminance=lux)).results.number_of_lamps
        for lux in range(50, 2001, 50)
    ]
    assert counts == sorted(counts)


def test_more_flux_never_more_lamps() -> None:
    room = default_room()
    counts = [
        compute_lighting(room, replace(default_requirements(), flux_per_lamp=flux)).results.number_of_lamps
        for flux in range(400, 20001, 400)
    ]
    assert counts == sorted(counts, reverse=True)


def test_tiny_target_still_gets_one_fixture() -> None:
    room = RoomDimensions(1.0, 1.0, 2.5, 0.8)
    req = replace(default_requirements(), target_illuminance=0.001, flux_per_lamp=20000.0)
    out = compute_lighting(room, req)
    assert out.results.number_of_lamps == 1
    assert (out.results.layout.rows, out.results.layout.columns) == (1, 1)
    assert out.lamp_positions[0].x == pytest.approx(0.5)
    assert out.lamp_positions[0].y == pytest.approx(0.5)


@pytest.mark.parametrize(
    "room_kwargs",
    [
        {"length": 0.0},
        {"width": 0.0},
        {"length": -3.0},
        {"height": 0.5},
        {"workplane_height": 3.0},
        {"workplane_height": 2.95},
        {"workplane_height": -0.1},
        {"length": float("nan")},
        {"width": float("inf")},
    ],
)
def test_invalid_room_rejected(room_kwargs) -> None:
    room = replace(default_room(), **room_kwargs)
    with pytest.raises(LightingInputError):
        compute_lighting(room, default_requirements())


@pytest.mark.parametrize(
    "req_kwargs",
    [
        {"flux_per_lamp": 0.0},
        {"flux_per_lamp": -100.0},
        {"target_illuminance": 0.0},
        {"target_illuminance": float("nan")},
        {"ceiling_reflectance": 1.2},
        {"wall_reflectance": -0.1},
        {"contamination_level": "muddy"},
        {"maintenance_interval": 0},
        {"maintenance_interval": 7},
        {"maintenance_interval": True},
    ],
)
def test_invalid_requirements_rejected(req_kwargs) -> None:
    req = replace(default_requirements(), **req_kwargs)
    with pytest.raises(LightingInputError):
        compute_lighting(default_room(), req)


def test_error_lists_every_problem() -> None:
    room = replace(default_room(), length=0.0, width=-1.0)
    req = replace(default_requirements(), flux_per_lamp=0.0)
    with pytest.raises(LightingInputError) as exc_info:
        compute_lighting(room, req)
    errors = exc_info.value.errors
    assert len(errors) == 3
    assert isinstance(exc_info.value, ValueError)


def test_grid_size_must_allow_a_span() -> None:
    with pytest.raises(LightingInputError):
        compute_lighting(default_room(), default_requirements(), grid_size=1)
    out = compute_lighting(default_room(), default_requirements(), grid_size=5)
    assert len(out.illuminance_grid) == 25


def test_result_dict_round_trip_through_from_dict() -> None:
    from lumenplan.results.types import LightingResults

    res = compute_lighting(default_room(), default_requirements()).results
    assert LightingResults.from_dict(res.to_dict()) == res


def test_numeric_strings_rejected_before_computing() -> None:
    req = replace(default_requirements(), maintenance_interval="2", flux_per_lamp="3600")
    with pytest.raises(LightingInputError) as exc_info:
        compute_lighting(default_room(), req)
    assert len(exc_info.value.errors) == 2


@pytest.mark.parametrize("side", [1e-200, 1e200])
def test_floor_area_must_be_finite_and_positive(side) -> None:
    room = RoomDimensions(side, side, 3.0, 0.85)
    with pytest.raises(LightingInputError) as exc_info:
        compute_lighting(room, default_requirements())
    assert any("Floor area" in msg for msg in exc_info.value.errors)


def test_overflowing_fixture_count_is_an_input_error() -> None:
    req = replace(default_requirements(), target_illuminance=1e308)
    with pytest.raises(LightingInputError) as exc_info:
        compute_lighting(default_room(), req)
    assert "Fixture count" in exc_info.value.errors[0]
