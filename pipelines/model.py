"""Canonical records produced and derived by the metric computation core."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["low", "medium", "high"]
AnomalyType = Literal["outlier", "performance"]
Priority = Literal["low", "medium", "high"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class CityMetricValue(_Record):
    """Cross-sectional value of one metric for one city."""

    city_id: str = Field(..., description="Catalog slug of the city (e.g. 'mumbai').")
    metric_id: str = Field(..., description="Catalog id of the metric (e.g. 'hdi').")
    value: float = Field(..., description="Generated value in the metric's unit.")


class TimeSeriesPoint(_Record):
    """One yearly observation of a metric for a city."""

    city_id: str = Field(..., description="Catalog slug of the city.")
    metric_id: str = Field(..., description="Catalog id of the metric.")
    year: int = Field(..., description="Calendar year of the observation.")
    value: float = Field(
        ..., description="Observed value, clamped to the unit range and rounded to 2 dp."
    )


class Anomaly(_Record):
    """A flagged (city, metric) value, either a statistical outlier or a threshold breach."""

    city_id: str = Field(..., description="Catalog slug of the city.")
    metric_id: str = Field(..., description="Catalog id of the metric.")
    value: float = Field(..., description="Current value that triggered the flag.")
    expected_range: tuple[float, float] = Field(
        ..., description="Range the value was expected to fall within."
    )
    severity: Severity = Field(..., description="low, medium or high.")
    type: AnomalyType = Field(..., description="'outlier' (z-score) or 'performance' (threshold).")
    description: str = Field(..., description="Human-readable explanation.")
    z_score: Optional[float] = Field(
        default=None, description="Population z-score for outliers; unset for thresholds."
    )


class PredictionPoint(_Record):
    """A point on the actual-plus-forecast line of a trend prediction."""

    year: int
    actual: Optional[float] = Field(default=None, description="Observed value, if any.")
    predicted: Optional[float] = Field(default=None, description="Extrapolated value, if any.")
    confidence: float = Field(..., ge=0.0, le=1.0, description="1.0 for observed years.")


class RankedRow(_Record):
    """A city's position in a ranking by one metric."""

    rank: int = Field(..., ge=1)
    city_id: str
    city_name: str
    state: str
    value: float


class PolicyInsight(_Record):
    """Canned recommendation attached to a city."""

    city_id: str
    category: str
    issue: str
    recommendation: str
    priority: Priority
    success_story: Optional[str] = None


__all__ = [
    "Anomaly",
    "AnomalyType",
    "CityMetricValue",
    "PolicyInsight",
    "PredictionPoint",
    "Priority",
    "RankedRow",
    "Severity",
    "TimeSeriesPoint",
]
