import time

from pipelines.model import CityMetricValue, TimeSeriesPoint
from storage.db import (
    connect,
    fetch_metric_values,
    fetch_time_series,
    upsert_metric_values,
    upsert_time_series,
)
from storage.store import MetricStore


def test_upserts_replace_existing_keys():
    conn = connect()
    try:
        assert upsert_metric_values(
            conn,
            [
                CityMetricValue(city_id="pune", metric_id="gdp", value=1.0),
                CityMetricValue(city_id="pune", metric_id="hdi", value=0.7),
                CityMetricValue(city_id="pune", metric_id="gdp", value=2.0),
            ],
        ) == 2
        upsert_metric_values(conn, [CityMetricValue(city_id="pune", metric_id="hdi", value=0.8)])

        stored = {v.metric_id: v.value for v in fetch_metric_values(conn)}
        assert stored == {"gdp": 2.0, "hdi": 0.8}

        points = [
            TimeSeriesPoint(city_id="pune", metric_id="gdp", year=year, value=float(year))
            for year in (2021, 2019, 2020)
        ]
        assert upsert_time_series(conn, points) == 3
        upsert_time_series(
            conn, [TimeSeriesPoint(city_id="pune", metric_id="gdp", year=2020, value=5.0)]
        )

        series = fetch_time_series(conn)
        assert [(p.year, p.value) for p in series] == [(2019, 2019.0), (2020, 5.0), (2021, 2021.0)]
    finally:
        conn.close()


def test_upserts_accept_empty_input():
    conn = connect()
    try:
        assert upsert_metric_values(conn, []) == 0
        assert upsert_time_series(conn, []) == 0
        assert fetch_metric_values(conn) == []
    finally:
        conn.close()


def test_repeated_reloads_stay_fast_and_complete():
    store = MetricStore(rng=21)
    try:
        started = time.perf_counter()
        for _ in range(5):
            store.reload()
        elapsed = time.perf_counter() - started

        expected = len(store.cities) * len(store.metrics)
        assert len(store.all_values()) == expected
        assert len(store.series("mumbai", "gdp")) == len(store.years)
        # a full load is a handful of set-based statements, not one per record
        assert elapsed < 5.0
    finally:
        store.close()
