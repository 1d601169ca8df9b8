"""Linear-trend forecasting over yearly series."""

from __future__ import annotations

from typing import Literal, Sequence

from analytics.statistics import extrapolate, linear_trend
from pipelines.model import PredictionPoint, TimeSeriesPoint

TrendDirection = Literal["increasing", "decreasing", "stable"]

MIN_TREND_POINTS = 3
DEFAULT_HORIZON_YEARS = 3
CONFIDENCE_DECAY_PER_YEAR = 0.2
CONFIDENCE_FLOOR = 0.3
DIRECTION_THRESHOLD_PCT = 5.0
DIRECTION_WINDOW = 3


def forecast_confidence(years_ahead: int) -> float:
    return max(CONFIDENCE_FLOOR, 1 - CONFIDENCE_DECAY_PER_YEAR * years_ahead)


def predict(
    series: Sequence[TimeSeriesPoint],
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> list[PredictionPoint]:
    """Observed points followed by ``horizon_years`` extrapolated ones.

    Series shorter than three points produce no prediction. Predicted values are
    floored at zero.
    """

    if len(series) < MIN_TREND_POINTS:
        return []

    ordered = sorted(series, key=lambda point: point.year)
    slope, intercept = linear_trend({"x": p.year, "y": p.value} for p in ordered)

    predictions = [
        PredictionPoint(year=point.year, actual=point.value, confidence=1.0)
        for point in ordered
    ]
    last_year = ordered[-1].year
    for years_ahead in range(1, max(horizon_years, 0) + 1):
        year = last_year + years_ahead
        predictions.append(
            PredictionPoint(
                year=year,
                predicted=max(0.0, extrapolate(slope, intercept, year)),
                confidence=forecast_confidence(years_ahead),
            )
        )
    return predictions


def trend_direction(predictions: Sequence[PredictionPoint]) -> TrendDirection:
    """Compare recent actuals with the first forecast years."""

    if len(predictions) < 2:
        return "stable"

    recent_actual = [p.actual for p in predictions if p.actual is not None][-DIRECTION_WINDOW:]
    upcoming = [p.predicted for p in predictions if p.predicted is not None][:DIRECTION_WINDOW]
    if not recent_actual or not upcoming:
        return "stable"

    actual_avg = sum(recent_actual) / len(recent_actual)
    predicted_avg = sum(upcoming) / len(upcoming)
    if actual_avg == 0:
        return "stable"

    change = (predicted_avg - actual_avg) / actual_avg * 100
    if change > DIRECTION_THRESHOLD_PCT:
        return "increasing"
    if change < -DIRECTION_THRESHOLD_PCT:
        return "decreasing"
    return "stable"


__all__ = [
    "CONFIDENCE_FLOOR",
    "DEFAULT_HORIZON_YEARS",
    "MIN_TREND_POINTS",
    "TrendDirection",
    "forecast_confidence",
    "predict",
    "trend_direction",
]
