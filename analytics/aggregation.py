"""Filtering, ranking and chart-shaped aggregation over the catalog and generated data."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from catalog.cities import City
from catalog.metrics import ALL_CATEGORIES, Metric
from pipelines.model import RankedRow, TimeSeriesPoint

T = TypeVar("T")

ALLOWED_ORDERS = {"asc", "desc"}
DEFAULT_HEATMAP_CITIES = 10
DEFAULT_HEATMAP_METRICS = 8

# unit -> divisor used to scale a value into a 0-1 colour intensity
HEATMAP_UNIT_SCALES: dict[str, float] = {
    "INR": 100000.0,
    "%": 100.0,
    "Index": 10.0,
    "Years": 100.0,
    "Tons": 20.0,
}
HEATMAP_DEFAULT_SCALE = 1000.0


def _matches(term: str, *fields: str) -> bool:
    needle = term.strip().lower()
    return any(needle in field.lower() for field in fields)


def filter_cities(cities: Iterable[City], term: str | None = None) -> list[City]:
    """Case-insensitive substring match on city name or state."""

    cities = list(cities)
    if not term or not term.strip():
        return cities
    return [city for city in cities if _matches(term, city.name, city.state)]


def filter_metrics(
    metrics: Iterable[Metric],
    category: str | None = ALL_CATEGORIES,
    term: str | None = None,
) -> list[Metric]:
    """Filter by exact category (or ``"All"``) and by a term in name or description."""

    filtered = list(metrics)
    if category and category != ALL_CATEGORIES:
        filtered = [metric for metric in filtered if metric.category == category]
    if term and term.strip():
        filtered = [
            metric for metric in filtered if _matches(term, metric.name, metric.description)
        ]
    return filtered


def _check_order(order: str) -> str:
    normalized = order.lower()
    if normalized not in ALLOWED_ORDERS:
        raise ValueError(f"Unsupported sort order '{order}'. Use 'asc' or 'desc'.")
    return normalized


def rank(
    cities: Iterable[City],
    values: Mapping[str, float],
    order: str = "desc",
) -> list[RankedRow]:
    """Rank cities by value; ties keep the order of ``cities`` and missing values count as 0."""

    descending = _check_order(order) == "desc"
    rows = [(city, values.get(city.city_id) or 0.0) for city in cities]
    # sorted() is stable, so equal values keep their catalog order in both directions
    ordered = sorted(rows, key=lambda row: -row[1] if descending else row[1])
    return [
        RankedRow(
            rank=position,
            city_id=city.city_id,
            city_name=city.name,
            state=city.state,
            value=value,
        )
        for position, (city, value) in enumerate(ordered, start=1)
    ]


def top_n(items: Iterable[T], n: int, key: Callable[[T], float]) -> list[T]:
    """The ``n`` highest items by ``key``, ties in input order."""

    if n <= 0:
        return []
    return sorted(items, key=lambda item: -key(item))[:n]


def heatmap_intensity(value: float, metric: Metric | None) -> float:
    if metric is None:
        return 0.0
    scale = HEATMAP_UNIT_SCALES.get(metric.unit, HEATMAP_DEFAULT_SCALE)
    return min(1.0, max(0.0, value / scale))


def heatmap(
    cities: Sequence[City],
    metrics: Sequence[Metric],
    values: Mapping[str, Mapping[str, float]],
    *,
    city_ids: Sequence[str] | None = None,
    metric_ids: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """City x metric matrix for the regional heatmap.

    ``values`` maps city id to ``{metric_id: value}``. Without a selection the first
    ten cities and first eight metrics are shown.
    """

    if city_ids:
        shown_cities = [c for c in cities if c.city_id in set(city_ids)]
    else:
        shown_cities = list(cities[:DEFAULT_HEATMAP_CITIES])
    if metric_ids:
        wanted = set(metric_ids)
        shown_metrics = [m for m in metrics if m.id in wanted]
    else:
        shown_metrics = list(metrics[:DEFAULT_HEATMAP_METRICS])

    matrix = []
    for city in shown_cities:
        city_values = values.get(city.city_id, {})
        cells = []
        for metric in shown_metrics:
            value = city_values.get(metric.id) or 0.0
            cells.append(
                {
                    "metric_id": metric.id,
                    "value": value,
                    "intensity": heatmap_intensity(value, metric),
                }
            )
        matrix.append({"city_id": city.city_id, "city": city.label, "cells": cells})
    return matrix


def series_table(
    series_by_city: Mapping[str, Sequence[TimeSeriesPoint]],
) -> list[dict[str, Any]]:
    """Year-aligned rows ``{"year": ..., <city_id>: value}`` for a multi-city line chart."""

    by_year: dict[int, dict[str, Any]] = {}
    for city_id, points in series_by_city.items():
        for point in points:
            by_year.setdefault(point.year, {"year": point.year})[city_id] = point.value
    return [by_year[year] for year in sorted(by_year)]


def scatter_points(
    cities: Iterable[City],
    x_values: Mapping[str, float],
    y_values: Mapping[str, float],
) -> list[dict[str, Any]]:
    return [
        {
            "city_id": city.city_id,
            "city": city.label,
            "x": x_values.get(city.city_id) or 0.0,
            "y": y_values.get(city.city_id) or 0.0,
        }
        for city in cities
    ]


__all__ = [
    "ALLOWED_ORDERS",
    "filter_cities",
    "filter_metrics",
    "heatmap",
    "heatmap_intensity",
    "rank",
    "scatter_points",
    "series_table",
    "top_n",
]
