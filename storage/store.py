"""Explicitly constructed in-memory store for one dashboard session."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import duckdb

from catalog.cities import CITIES, City, get_city_by_id
from catalog.metrics import METRICS, Metric, get_metric_by_id
from pipelines.common import RandomSource, resolve_rng
from pipelines.generator import generate_cross_sectional, generate_time_series
from pipelines.model import CityMetricValue, TimeSeriesPoint
from pipelines.profiles import DEFAULT_YEARS
from storage.db import (
    clear_tables,
    connect,
    fetch_metric_values,
    fetch_time_series,
    upsert_metric_values,
    upsert_time_series,
)

logger = logging.getLogger(__name__)


class MetricStore:
    """Catalog plus generated data, written once per load and read many times.

    The store does nothing until :meth:`initialize` is called; calling it again
    regenerates every value, which is how a dashboard "reload" is modelled.
    """

    def __init__(
        self,
        cities: Iterable[City] = CITIES,
        metrics: Iterable[Metric] = METRICS,
        *,
        years: Sequence[int] = DEFAULT_YEARS,
        rng: RandomSource = None,
        conn: duckdb.DuckDBPyConnection | None = None,
    ) -> None:
        self._cities = tuple(cities)
        self._metrics = tuple(metrics)
        self._years = tuple(sorted(years))
        self._rng = resolve_rng(rng)
        self._conn = conn if conn is not None else connect()
        self._initialized = False

    @property
    def cities(self) -> tuple[City, ...]:
        return self._cities

    @property
    def metrics(self) -> tuple[Metric, ...]:
        return self._metrics

    @property
    def years(self) -> tuple[int, ...]:
        return self._years

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        return self._conn

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "MetricStore":
        """Generate and persist all cross-sectional values and time series."""

        clear_tables(self._conn)
        values = generate_cross_sectional(self._cities, self._metrics, self._rng)
        points = generate_time_series(self._cities, self._metrics, self._years, self._rng)
        written_values = upsert_metric_values(self._conn, values)
        written_points = upsert_time_series(self._conn, points)
        self._initialized = True
        logger.info(
            "Initialized metric store: %s cities, %s metrics, %s values, %s series points.",
            len(self._cities),
            len(self._metrics),
            written_values,
            written_points,
        )
        return self

    reload = initialize

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "MetricStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def city(self, city_id: str) -> City | None:
        return get_city_by_id(city_id, self._cities)

    def metric(self, metric_id: str) -> Metric | None:
        return get_metric_by_id(metric_id, self._metrics)

    def lookup_value(self, city_id: str, metric_id: str) -> float | None:
        """Return the current value, or ``None`` when the pair has no data."""

        found = fetch_metric_values(
            self._conn, where="city_id = ? AND metric_id = ?", params=[city_id, metric_id]
        )
        if not found:
            return None
        return found[0].value

    def values_for_metric(self, metric_id: str) -> dict[str, float]:
        """Map of city id to current value for ``metric_id``."""

        found = fetch_metric_values(self._conn, where="metric_id = ?", params=[metric_id])
        return {item.city_id: item.value for item in found}

    def values_for_city(self, city_id: str) -> dict[str, float]:
        found = fetch_metric_values(self._conn, where="city_id = ?", params=[city_id])
        return {item.metric_id: item.value for item in found}

    def all_values(self) -> list[CityMetricValue]:
        return fetch_metric_values(self._conn)

    def series(self, city_id: str, metric_id: str) -> list[TimeSeriesPoint]:
        return fetch_time_series(
            self._conn, where="city_id = ? AND metric_id = ?", params=[city_id, metric_id]
        )


__all__ = ["MetricStore"]
