import math

import pytest

from catalog.cities import CITIES, City
from catalog.metrics import METRICS, Metric, get_metric_by_id
from pipelines.generator import (
    city_factor,
    generate_cross_sectional,
    generate_time_series,
    year_factor,
)
from pipelines.profiles import DEFAULT_YEARS, get_profile


def test_city_factor_uses_first_character():
    # ord("m") == 109, ord("d") == 100
    assert city_factor("mumbai") == pytest.approx(1.09)
    assert city_factor("delhi") == pytest.approx(1.00)
    assert city_factor("") == 1.0


def test_year_factor_applies_shock_and_growth():
    assert year_factor("gdp", 2019, 0) == pytest.approx(1.0)
    assert year_factor("gdp", 2020, 1) == pytest.approx(0.9)
    assert year_factor("unemployment", 2020, 1) == pytest.approx(1.3)
    assert year_factor("healthcare_expenditure", 2020, 1) == pytest.approx(1.2)
    assert year_factor("literacy", 2020, 1) == pytest.approx(1.0)
    assert year_factor("gdp", 2022, 3) == pytest.approx(1.15)


def test_cross_sectional_covers_every_pair_within_range():
    values = generate_cross_sectional(CITIES, METRICS, rng=7)

    assert len(values) == len(CITIES) * len(METRICS)
    assert len({(v.city_id, v.metric_id) for v in values}) == len(values)
    for item in values:
        profile = get_profile(item.metric_id)
        assert profile.low <= item.value <= profile.high
        assert math.isfinite(item.value)


def test_cross_sectional_is_reproducible_with_seed():
    first = generate_cross_sectional(CITIES, METRICS, rng=99)
    second = generate_cross_sectional(CITIES, METRICS, rng=99)

    assert [v.value for v in first] == [v.value for v in second]


def test_unknown_metric_falls_back_to_default_range():
    custom = Metric(id="happiness", name="Happiness", category="Social", unit="Score",
                    description="Not in the profile table")
    values = generate_cross_sectional(CITIES[:3], [custom], rng=1)

    assert len(values) == 3
    assert all(0 <= v.value <= 100 for v in values)

    series = generate_time_series(CITIES[:1], [custom], rng=1)
    assert [p.value for p in series] == [0.0] * len(DEFAULT_YEARS)


def test_time_series_is_ordered_and_within_noise_band():
    cities = [c for c in CITIES if c.city_id in {"mumbai", "delhi"}]
    metrics = [get_metric_by_id(m) for m in ("gdp", "unemployment", "healthcare_expenditure")]
    points = generate_time_series(cities, metrics, years=[2023, 2019, 2021, 2020, 2022], rng=3)

    assert len(points) == len(cities) * len(metrics) * 5
    for city in cities:
        for metric in metrics:
            series = [p for p in points if p.city_id == city.city_id and p.metric_id == metric.id]
            assert [p.year for p in series] == [2019, 2020, 2021, 2022, 2023]
            for index, point in enumerate(series):
                expected = (
                    get_profile(metric.id).base
                    * city_factor(city.city_id)
                    * year_factor(metric.id, point.year, index)
                )
                assert expected * 0.95 - 0.01 <= point.value <= expected * 1.05 + 0.01
                assert point.value == round(point.value, 2)


def test_time_series_clamps_to_unit_bounds():
    capped = Metric(id="literacy", name="Literacy Rate", category="Social", unit="%",
                    description="Percentage of literate population")
    tiny = Metric(id="hdi", name="HDI", category="Social", unit="Index (0-1)",
                  description="Composite index")
    cities = [City(city_id="zeta", name="Zeta", state="Nowhere")]
    points = generate_time_series(cities, [capped, tiny], years=range(2019, 2040), rng=5)

    for point in points:
        if point.metric_id == "literacy":
            assert 0 <= point.value <= 100
        else:
            assert 0 <= point.value <= 1
    assert max(p.value for p in points if p.metric_id == "literacy") == 100.0
