"""
Anomaly detection over the current cross-sectional values.

Two independent checks run per (city, metric):

- outlier: population z-score against all cities' non-zero values for the metric.
- performance: fixed domain thresholds for a handful of metrics.

Both may fire for the same pair; they are reported as separate entries.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from analytics.statistics import population_stats, z_score
from catalog.cities import City
from catalog.metrics import Metric
from pipelines.model import Anomaly

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 3
OUTLIER_Z = 2.0
MEDIUM_Z = 2.5
HIGH_Z = 3.0

# -----------------------------------------------------------------------------
# PERFORMANCE RULES: fixed thresholds, independent of the population
# -----------------------------------------------------------------------------
PERFORMANCE_RULES: dict[str, dict] = {
    "physician_shortage": {
        "metric_id": "physicians",
        "category": "Health",
        "direction": "below",
        "threshold": 0.5,
        "expected_range": (0.5, 5.0),
        "severity": "high",
        "description": "Critical shortage of physicians",
    },
    "excess_co2": {
        "metric_id": "co2_emissions",
        "category": "Environment",
        "direction": "above",
        "threshold": 4.0,
        "expected_range": (0.0, 4.0),
        "severity": "high",
        "description": "Excessive CO2 emissions",
    },
    "high_unemployment": {
        "metric_id": "unemployment",
        "category": "Economic",
        "direction": "above",
        "threshold": 10.0,
        "expected_range": (0.0, 10.0),
        "severity": "medium",
        "description": "High unemployment rate",
    },
}


def classify_severity(z: float) -> str:
    magnitude = abs(z)
    if magnitude > HIGH_Z:
        return "high"
    if magnitude > MEDIUM_Z:
        return "medium"
    return "low"


def _rule_fires(rule: Mapping, metric: Metric, value: float) -> bool:
    if rule["metric_id"] != metric.id or rule["category"] != metric.category:
        return False
    if rule["direction"] == "below":
        return value < rule["threshold"]
    return value > rule["threshold"]


def detect_anomalies(
    values_by_metric: Mapping[str, Mapping[str, float]],
    cities: Iterable[City],
    metrics: Iterable[Metric],
) -> list[Anomaly]:
    """Scan every metric for outliers and threshold breaches.

    ``values_by_metric`` maps metric id to ``{city_id: value}``. Cities without a
    value are scored as 0. Metrics with fewer than three non-zero values are
    skipped entirely.
    """

    cities = tuple(cities)
    anomalies: list[Anomaly] = []

    for metric in metrics:
        by_city = values_by_metric.get(metric.id, {})
        current = [(city.city_id, by_city.get(city.city_id) or 0.0) for city in cities]
        population = [value for _, value in current if value > 0]
        if len(population) < MIN_SAMPLE_SIZE:
            logger.debug(
                "Skipping anomaly scan for %s (%s non-zero values).", metric.id, len(population)
            )
            continue

        mean, std = population_stats(population)
        expected = (mean - OUTLIER_Z * std, mean + OUTLIER_Z * std)

        for city_id, value in current:
            z = z_score(value, population)
            if abs(z) > OUTLIER_Z:
                direction = "Unusually high" if z > 0 else "Unusually low"
                anomalies.append(
                    Anomaly(
                        city_id=city_id,
                        metric_id=metric.id,
                        value=value,
                        expected_range=expected,
                        severity=classify_severity(z),
                        type="outlier",
                        description=f"{direction} {metric.name} value",
                        z_score=round(z, 2),
                    )
                )

            for rule in PERFORMANCE_RULES.values():
                if _rule_fires(rule, metric, value):
                    anomalies.append(
                        Anomaly(
                            city_id=city_id,
                            metric_id=metric.id,
                            value=value,
                            expected_range=rule["expected_range"],
                            severity=rule["severity"],
                            type="performance",
                            description=rule["description"],
                        )
                    )

    return anomalies


__all__ = [
    "HIGH_Z",
    "MEDIUM_Z",
    "MIN_SAMPLE_SIZE",
    "OUTLIER_Z",
    "PERFORMANCE_RULES",
    "classify_severity",
    "detect_anomalies",
]
