"""Population statistics and least-squares trend helpers."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import numpy as np

MIN_CORRELATION_PAIRS = 3


def population_stats(values: Sequence[float]) -> tuple[float, float]:
    """Population (not sample) mean and standard deviation; ``(0, 0)`` for no values."""

    if len(values) == 0:
        return 0.0, 0.0
    arr = np.asarray(values, dtype="float64")
    return float(np.mean(arr)), float(np.std(arr))


def z_score(value: float, population: Sequence[float]) -> float:
    mean, std = population_stats(population)
    if std == 0:
        return 0.0
    return (value - mean) / std


def linear_trend(points: Iterable[Mapping[str, float]]) -> tuple[float, float]:
    """Ordinary least-squares fit over ``{"x": ..., "y": ...}`` points.

    Returns ``(slope, intercept)``. When every x is identical the line is flat
    through the mean of y; with no points it is ``(0, 0)``.
    """

    xs = []
    ys = []
    for point in points:
        xs.append(float(point["x"]))
        ys.append(float(point["y"]))
    n = len(xs)
    if n == 0:
        return 0.0, 0.0

    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_xx = sum(x * x for x in xs)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0, sum_y / n

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def extrapolate(slope: float, intercept: float, year: float) -> float:
    return slope * year + intercept


def correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson correlation of paired values; 0 when undefined."""

    if len(xs) != len(ys) or len(xs) < MIN_CORRELATION_PAIRS:
        return 0.0
    x = np.asarray(xs, dtype="float64")
    y = np.asarray(ys, dtype="float64")
    if np.std(x) == 0 or np.std(y) == 0:
        return 0.0
    return float(np.corrcoef(x, y)[0, 1])


__all__ = [
    "correlation",
    "extrapolate",
    "linear_trend",
    "population_stats",
    "z_score",
]
