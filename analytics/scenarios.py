"""What-if scenarios applied as percentage changes to current values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from catalog.metrics import Metric, get_metric_by_id


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    impact: Mapping[str, float]  # metric_id -> percent change


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        name="Green Energy Investment",
        description="Invest 20% more in renewable energy",
        impact={"renewable_energy": 25.0, "co2_emissions": -15.0},
    ),
    Scenario(
        name="Healthcare Boost",
        description="Increase healthcare spending by 30%",
        impact={"healthcare_expenditure": 30.0, "physicians": 20.0},
    ),
)


def get_scenario(name: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.name == name:
            return scenario
    raise ValueError(f"Unknown scenario '{name}'.")


def apply_scenario(
    scenario: Scenario,
    values_by_city: Mapping[str, Mapping[str, float]],
    metrics: Iterable[Metric],
) -> dict[str, dict[str, float]]:
    """Projected values per city for the metrics the scenario touches.

    Cities with no value for an impacted metric are left out for that metric.
    """

    metrics = tuple(metrics)
    projected: dict[str, dict[str, float]] = {}
    for city_id, city_values in values_by_city.items():
        changes: dict[str, float] = {}
        for metric_id, pct in scenario.impact.items():
            current = city_values.get(metric_id)
            if current is None:
                continue
            value = current * (1 + pct / 100)
            metric = get_metric_by_id(metric_id, metrics)
            changes[metric_id] = metric.clamp(value) if metric else value
        if changes:
            projected[city_id] = changes
    return projected


__all__ = ["SCENARIOS", "Scenario", "apply_scenario", "get_scenario"]
