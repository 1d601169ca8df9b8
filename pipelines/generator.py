"""Synthetic data generator for city metric values and yearly time series."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from catalog.cities import City
from catalog.metrics import Metric
from pipelines.common import RandomSource, resolve_rng
from pipelines.model import CityMetricValue, TimeSeriesPoint
from pipelines.profiles import (
    ANNUAL_GROWTH,
    DEFAULT_YEARS,
    NOISE_RANGE,
    SHOCK_YEAR,
    get_profile,
)

logger = logging.getLogger(__name__)


def city_factor(city_id: str) -> float:
    """Deterministic per-city multiplier derived from the first character of the id."""

    if not city_id:
        return 1.0
    return 1 + (ord(city_id[0]) % 10) / 100


def year_factor(metric_id: str, year: int, year_index: int) -> float:
    """Growth multiplier for ``year``; the shock year uses the metric's shock factor."""

    if year == SHOCK_YEAR:
        return get_profile(metric_id).shock_factor
    return 1 + year_index * ANNUAL_GROWTH


def generate_cross_sectional(
    cities: Iterable[City],
    metrics: Iterable[Metric],
    rng: RandomSource = None,
) -> list[CityMetricValue]:
    """Draw one uniform value per (city, metric) inside the metric's plausible range."""

    generator = resolve_rng(rng)
    metrics = tuple(metrics)
    values: list[CityMetricValue] = []
    for city in cities:
        for metric in metrics:
            profile = get_profile(metric.id)
            raw = float(generator.uniform(profile.low, profile.high))
            values.append(
                CityMetricValue(
                    city_id=city.city_id,
                    metric_id=metric.id,
                    value=metric.clamp(raw),
                )
            )
    logger.debug("Generated %s cross-sectional values.", len(values))
    return values


def generate_time_series(
    cities: Iterable[City],
    metrics: Iterable[Metric],
    years: Sequence[int] = DEFAULT_YEARS,
    rng: RandomSource = None,
) -> list[TimeSeriesPoint]:
    """Build one yearly series per (city, metric), ordered by year ascending."""

    generator = resolve_rng(rng)
    metrics = tuple(metrics)
    ordered_years = sorted(years)
    low_noise, high_noise = NOISE_RANGE
    points: list[TimeSeriesPoint] = []
    for city in cities:
        factor = city_factor(city.city_id)
        for metric in metrics:
            base = get_profile(metric.id).base
            for index, year in enumerate(ordered_years):
                noise = float(generator.uniform(low_noise, high_noise))
                value = base * factor * year_factor(metric.id, year, index) * noise
                points.append(
                    TimeSeriesPoint(
                        city_id=city.city_id,
                        metric_id=metric.id,
                        year=year,
                        value=round(metric.clamp(value), 2),
                    )
                )
    logger.debug("Generated %s time-series points.", len(points))
    return points


__all__ = [
    "city_factor",
    "generate_cross_sectional",
    "generate_time_series",
    "year_factor",
]
