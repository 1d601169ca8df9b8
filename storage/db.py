"""DuckDB tables holding the generated metric values for one dashboard session."""

from __future__ import annotations

from typing import Iterable, Sequence

import duckdb
import pandas as pd

from pipelines.model import CityMetricValue, TimeSeriesPoint

IN_MEMORY = ":memory:"

METRIC_VALUES_TABLE = "city_metric_values"
TIME_SERIES_TABLE = "time_series_points"
_STAGING_VIEW = "staged_rows"

_METRIC_VALUE_COLUMNS = ("city_id", "metric_id", "value")
_TIME_SERIES_COLUMNS = ("city_id", "metric_id", "year", "value")


def connect(*, ensure: bool = True) -> duckdb.DuckDBPyConnection:
    """Open an in-memory DuckDB connection, optionally creating the schema."""

    conn = duckdb.connect(IN_MEMORY)
    if ensure:
        ensure_tables(conn)
    return conn


def ensure_tables(conn: duckdb.DuckDBPyConnection) -> None:
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {METRIC_VALUES_TABLE} (
            city_id TEXT NOT NULL,
            metric_id TEXT NOT NULL,
            value DOUBLE,
            PRIMARY KEY (city_id, metric_id)
        )
        """
    )
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {TIME_SERIES_TABLE} (
            city_id TEXT NOT NULL,
            metric_id TEXT NOT NULL,
            year INTEGER NOT NULL,
            value DOUBLE,
            PRIMARY KEY (city_id, metric_id, year)
        )
        """
    )


def clear_tables(conn: duckdb.DuckDBPyConnection) -> None:
    conn.execute(f"DELETE FROM {METRIC_VALUES_TABLE}")
    conn.execute(f"DELETE FROM {TIME_SERIES_TABLE}")


def _upsert_frame(
    conn: duckdb.DuckDBPyConnection,
    table: str,
    columns: Sequence[str],
    frame: pd.DataFrame,
) -> int:
    if frame.empty:
        return 0
    column_list = ", ".join(columns)
    conn.register(_STAGING_VIEW, frame)
    try:
        conn.execute(
            f"INSERT OR REPLACE INTO {table} ({column_list}) "
            f"SELECT {column_list} FROM {_STAGING_VIEW}"
        )
    finally:
        conn.unregister(_STAGING_VIEW)
    return len(frame)


def upsert_metric_values(
    conn: duckdb.DuckDBPyConnection, values: Iterable[CityMetricValue]
) -> int:
    """Insert or replace cross-sectional values in one statement; returns the number written."""

    # a single INSERT cannot touch the same key twice, so the last record per key wins
    latest = {(v.city_id, v.metric_id): v.value for v in values}
    frame = pd.DataFrame(
        [(city_id, metric_id, value) for (city_id, metric_id), value in latest.items()],
        columns=list(_METRIC_VALUE_COLUMNS),
    )
    return _upsert_frame(conn, METRIC_VALUES_TABLE, _METRIC_VALUE_COLUMNS, frame)


def upsert_time_series(
    conn: duckdb.DuckDBPyConnection, points: Iterable[TimeSeriesPoint]
) -> int:
    latest = {(p.city_id, p.metric_id, p.year): p.value for p in points}
    frame = pd.DataFrame(
        [(*key, value) for key, value in latest.items()],
        columns=list(_TIME_SERIES_COLUMNS),
    )
    return _upsert_frame(conn, TIME_SERIES_TABLE, _TIME_SERIES_COLUMNS, frame)


def fetch_metric_values(
    conn: duckdb.DuckDBPyConnection,
    *,
    where: str | None = None,
    params: Sequence[object] | None = None,
) -> list[CityMetricValue]:
    sql = f"SELECT city_id, metric_id, value FROM {METRIC_VALUES_TABLE}"
    if where:
        sql += f" WHERE {where}"
    cursor = conn.execute(sql, params or [])
    return [
        CityMetricValue(city_id=row[0], metric_id=row[1], value=row[2])
        for row in cursor.fetchall()
        if row[2] is not None
    ]


def fetch_time_series(
    conn: duckdb.DuckDBPyConnection,
    *,
    where: str | None = None,
    params: Sequence[object] | None = None,
) -> list[TimeSeriesPoint]:
    """Query stored series points, ordered by year ascending."""

    sql = f"SELECT city_id, metric_id, year, value FROM {TIME_SERIES_TABLE}"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY city_id, metric_id, year"
    cursor = conn.execute(sql, params or [])
    return [
        TimeSeriesPoint(city_id=row[0], metric_id=row[1], year=row[2], value=row[3])
        for row in cursor.fetchall()
        if row[3] is not None
    ]


__all__ = [
    "METRIC_VALUES_TABLE",
    "TIME_SERIES_TABLE",
    "clear_tables",
    "connect",
    "ensure_tables",
    "fetch_metric_values",
    "fetch_time_series",
    "upsert_metric_values",
    "upsert_time_series",
]
