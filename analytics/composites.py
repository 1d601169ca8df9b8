"""Composite scores used to rank cities on healthcare and environment."""

from __future__ import annotations

from typing import Iterable, Mapping

# (metric_id, weight, scale, offset): term = weight * (offset + scale * value)
HEALTHCARE_TERMS: tuple[tuple[str, float, float, float], ...] = (
    ("physicians", 0.4, 1.0, 0.0),
    ("hospital_beds", 0.3, 1.0, 0.0),
    ("healthcare_expenditure", 0.3, 1 / 1000, 0.0),
)

ENVIRONMENT_TERMS: tuple[tuple[str, float, float, float], ...] = (
    ("renewable_energy", 0.4, 1.0, 0.0),
    ("co2_emissions", 0.3, -20.0, 100.0),
    ("forest_area", 0.3, 1.0, 0.0),
)


def composite_score(weighted_terms: Iterable[tuple[float, float]]) -> float:
    """Weighted sum of ``(value, weight)`` pairs."""

    return sum(value * weight for value, weight in weighted_terms)


def _score(
    values: Mapping[str, float], terms: Iterable[tuple[str, float, float, float]]
) -> float:
    weighted = []
    for metric_id, weight, scale, offset in terms:
        raw = values.get(metric_id) or 0.0
        weighted.append((offset + scale * raw, weight))
    return composite_score(weighted)


def healthcare_score(values: Mapping[str, float]) -> float:
    return _score(values, HEALTHCARE_TERMS)


def environment_score(values: Mapping[str, float]) -> float:
    return _score(values, ENVIRONMENT_TERMS)


__all__ = [
    "ENVIRONMENT_TERMS",
    "HEALTHCARE_TERMS",
    "composite_score",
    "environment_score",
    "healthcare_score",
]
