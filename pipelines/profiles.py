"""Per-metric generation profiles: plausible ranges, base levels and shock factors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricProfile:
    """Parameters the synthetic generator needs for one metric."""

    metric_id: str
    low: float
    high: float
    base: float
    shock_factor: float = 1.0


DEFAULT_RANGE: tuple[float, float] = (0.0, 100.0)
DEFAULT_BASE = 0.0

SHOCK_YEAR = 2020
DEFAULT_YEARS: tuple[int, ...] = (2019, 2020, 2021, 2022, 2023)
ANNUAL_GROWTH = 0.05
NOISE_RANGE: tuple[float, float] = (0.95, 1.05)

# metric_id: (low, high, base[, shock_factor])
_PROFILE_TABLE: dict[str, tuple[float, ...]] = {
    # Economic (INR Crores, INR, %, ratio)
    "gdp": (50000, 200000, 400000, 0.9),
    "gni": (45000, 180000, 350000, 0.9),
    "gdp_per_capita": (80000, 300000, 150000),
    "unemployment": (3, 12, 7, 1.3),
    "inflation": (2, 8, 5),
    "fdi": (1000, 5000, 75000, 0.9),
    "trade_ratio": (0.5, 1.5, 1.0),
    "public_debt": (20, 60, 40),
    # Social
    "hdi": (0.6, 0.9, 0.7),
    "life_expectancy": (65, 80, 70),
    "infant_mortality": (10, 50, 30),
    "literacy": (70, 95, 80),
    "education_index": (0.5, 0.9, 0.6),
    "gender_inequality": (0.2, 0.5, 0.4),
    "population_growth": (1, 3, 2),
    "urban_population": (40, 90, 60),
    # Health
    "healthcare_expenditure": (5000, 20000, 8000, 1.2),
    "physicians": (0.5, 2, 1.0),
    "hospital_beds": (1, 5, 2.0),
    "clean_water": (70, 95, 80),
    "vaccination": (60, 95, 75),
    # Environment
    "co2_emissions": (1, 5, 2.5),
    "renewable_energy": (5, 30, 15),
    "forest_area": (10, 40, 25),
    "air_quality": (50, 150, 100),
    "environmental_performance": (30, 70, 50),
    # Governance
    "corruption_index": (30, 70, 50),
    "internet_penetration": (40, 90, 60),
    "mobile_subscriptions": (60, 120, 90),
    "infrastructure_quality": (3, 6, 4.0),
    "political_stability": (-1, 1, 0),
    # Equality
    "gini_coefficient": (0.3, 0.5, 0.4),
    "poverty_rate": (5, 25, 15),
    "social_protection": (20, 80, 50),
}


def _build_profiles() -> dict[str, MetricProfile]:
    profiles: dict[str, MetricProfile] = {}
    for metric_id, row in _PROFILE_TABLE.items():
        low, high, base = (float(v) for v in row[:3])
        shock = float(row[3]) if len(row) > 3 else 1.0
        profiles[metric_id] = MetricProfile(
            metric_id=metric_id, low=low, high=high, base=base, shock_factor=shock
        )
    return profiles


PROFILES: dict[str, MetricProfile] = _build_profiles()


def get_profile(metric_id: str) -> MetricProfile:
    """Return the profile for ``metric_id``, falling back to the default range."""

    profile = PROFILES.get(metric_id)
    if profile is not None:
        return profile
    low, high = DEFAULT_RANGE
    return MetricProfile(metric_id=metric_id, low=low, high=high, base=DEFAULT_BASE)


__all__ = [
    "ANNUAL_GROWTH",
    "DEFAULT_BASE",
    "DEFAULT_RANGE",
    "DEFAULT_YEARS",
    "MetricProfile",
    "NOISE_RANGE",
    "PROFILES",
    "SHOCK_YEAR",
    "get_profile",
]
