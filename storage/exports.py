"""Tabular export of selected cities and metrics."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import duckdb
import pandas as pd

from pipelines.common import coerce_float
from storage.store import MetricStore

ALLOWED_FORMATS = {"csv", "parquet"}
BASE_COLUMNS = ("city_id", "city", "state")
_EXPORT_VIEW = "export_rows"


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def export_rows(
    store: MetricStore,
    city_ids: Sequence[str],
    metric_ids: Sequence[str],
) -> list[dict[str, Any]]:
    """One row per requested city with a column per requested metric.

    Unknown cities keep their id as the name with an empty state; missing values
    are exported as 0. Metric ids that collide with a base column raise ``ValueError``.
    """

    clashing = sorted(set(metric_ids) & set(BASE_COLUMNS))
    if clashing:
        raise ValueError(f"Metric ids clash with export columns: {', '.join(clashing)}.")

    rows: list[dict[str, Any]] = []
    for city_id in city_ids:
        city = store.city(city_id)
        values = store.values_for_city(city_id)
        row: dict[str, Any] = {
            "city_id": city_id,
            "city": city.name if city else city_id,
            "state": city.state if city else "",
        }
        for metric_id in metric_ids:
            row[metric_id] = values.get(metric_id) or 0.0
        rows.append(row)
    return rows


def rows_to_dataframe(rows: Sequence[dict[str, Any]]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=list(BASE_COLUMNS))
    return pd.DataFrame(list(rows))


def _copy_rows(
    conn: duckdb.DuckDBPyConnection,
    rows: Sequence[dict[str, Any]],
    destination: str | Path,
    options: str,
) -> Path:
    dest_path = Path(destination)
    _ensure_parent(dest_path)
    frame = rows_to_dataframe(rows)
    sanitized_path = str(dest_path).replace("'", "''")
    conn.register(_EXPORT_VIEW, frame)
    try:
        conn.execute(f"COPY (SELECT * FROM {_EXPORT_VIEW}) TO '{sanitized_path}' ({options})")
    finally:
        conn.unregister(_EXPORT_VIEW)
    return dest_path


def export_to_csv(
    conn: duckdb.DuckDBPyConnection,
    rows: Sequence[dict[str, Any]],
    destination: str | Path,
    *,
    include_header: bool = True,
) -> Path:
    """Write export rows to a CSV file using DuckDB's COPY command."""

    return _copy_rows(
        conn,
        rows,
        destination,
        f"FORMAT CSV, HEADER {'TRUE' if include_header else 'FALSE'}",
    )


def export_to_parquet(
    conn: duckdb.DuckDBPyConnection,
    rows: Sequence[dict[str, Any]],
    destination: str | Path,
) -> Path:
    return _copy_rows(conn, rows, destination, "FORMAT PARQUET")


def write_rows(
    conn: duckdb.DuckDBPyConnection,
    rows: Sequence[dict[str, Any]],
    destination: str | Path,
    fmt: str = "csv",
) -> Path:
    fmt = fmt.lower()
    if fmt not in ALLOWED_FORMATS:
        raise ValueError(f"Unsupported format '{fmt}'.")
    if fmt == "csv":
        return export_to_csv(conn, rows, destination)
    return export_to_parquet(conn, rows, destination)


def read_rows_csv(
    conn: duckdb.DuckDBPyConnection, source: str | Path
) -> list[dict[str, Any]]:
    """Read a CSV written by :func:`export_to_csv` back into export rows."""

    frame = conn.execute(
        "SELECT * FROM read_csv_auto(?, header = true, all_varchar = true)", [str(source)]
    ).df()
    rows: list[dict[str, Any]] = []
    for record in frame.to_dict(orient="records"):
        row: dict[str, Any] = {}
        for column, raw in record.items():
            if column in BASE_COLUMNS:
                row[column] = "" if raw is None or pd.isna(raw) else str(raw)
            else:
                numeric = coerce_float(raw)
                row[column] = numeric if numeric is not None else 0.0
        rows.append(row)
    return rows


__all__ = [
    "ALLOWED_FORMATS",
    "export_rows",
    "export_to_csv",
    "export_to_parquet",
    "read_rows_csv",
    "rows_to_dataframe",
    "write_rows",
]
