from __future__ import annotations

import pytest

from lumenplan.database.catalog import FixtureRecord
from lumenplan.metrics.energy import calculate_energy_metrics, efficiency_rating
from lumenplan.results.types import EFFICIENCY_RATINGS


@pytest.mark.parametrize(
    "density,rating",
    [
        (0.0, "Excellent"),
        (4.99, "Excellent"),
        (5.0, "Very Good"),
        (7.99, "Very Good"),
        (8.0, "Good"),
        (11.99, "Good"),
        (12.0, "Average"),
        (14.99, "Average"),
        (15.0, "Poor"),
        (40.0, "Poor"),
    ],
)
def test_efficiency_rating_thresholds(density, rating) -> None:
    assert efficiency_rating(density) == rating


def test_fallback_efficacy_when_no_fixture() -> None:
    m = calculate_energy_metrics(20, 3600.0, 80.0)
    assert m.watts_per_lamp == pytest.approx(36.0)
    assert m.total_power == pytest.approx(720.0)
    assert m.power_density == pytest.approx(9.0)
    assert m.efficiency_rating == "Good"
    assert m.fixture_label is None


def test_catalog_wattage_preferred_over_efficacy() -> None:
    incandescent = FixtureRecord("incandescent-100w", "Incandescent (100W)", 1600, 100, "Incandescent")
    m = calculate_energy_metrics(10, 1600.0, 20.0, fixture=incandescent)
    assert m.watts_per_lamp == 100.0
    assert m.total_power == pytest.approx(1000.0)
    assert m.power_density == pytest.approx(50.0)
    assert m.efficiency_rating == "Poor"
    assert m.fixture_label == "Incandescent (100W)"


def test_custom_fallback_efficacy() -> None:
    m = calculate_energy_metrics(4, 1500.0, 10.0, fallback_efficacy=150.0)
    assert m.total_power == pytest.approx(40.0)
    assert m.power_density == pytest.approx(4.0)
    assert m.efficiency_rating == "Excellent"


def test_ratings_cover_the_published_scale_in_order() -> None:
    densities = [0.0, 5.0, 8.0, 12.0, 15.0]
    assert tuple(efficiency_rating(d) for d in densities) == EFFICIENCY_RATINGS
