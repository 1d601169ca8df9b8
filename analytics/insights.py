"""
Key insights and rule-based policy recommendations.

Policy rules are fixed thresholds over a city's current values. A rule whose
metric has no value for a city does not fire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from analytics.aggregation import top_n
from analytics.composites import environment_score, healthcare_score
from catalog.cities import City
from pipelines.model import PolicyInsight

TOP_HDI_COUNT = 10
TOP_INEQUALITY_COUNT = 5
TOP_HEALTHCARE_COUNT = 5
ENVIRONMENT_EDGE_COUNT = 3

POLICY_RULES: dict[str, dict] = {
    "low_physicians": {
        "metric_id": "physicians",
        "direction": "below",
        "threshold": 0.8,
        "category": "Healthcare",
        "issue": "Low physician density",
        "recommendation": "Implement medical education incentives and improve healthcare infrastructure",
        "priority": "high",
    },
    "few_hospital_beds": {
        "metric_id": "hospital_beds",
        "direction": "below",
        "threshold": 2.0,
        "category": "Healthcare",
        "issue": "Insufficient hospital beds",
        "recommendation": "Expand hospital capacity and invest in healthcare facilities",
        "priority": "high",
    },
    "low_literacy": {
        "metric_id": "literacy",
        "direction": "below",
        "threshold": 85.0,
        "category": "Education",
        "issue": "Low literacy rate",
        "recommendation": "Launch adult literacy programs and improve school infrastructure",
        "priority": "medium",
    },
    "high_unemployment": {
        "metric_id": "unemployment",
        "direction": "above",
        "threshold": 8.0,
        "category": "Economic",
        "issue": "High unemployment rate",
        "recommendation": "Create job training programs and attract new industries",
        "priority": "high",
    },
    "high_co2": {
        "metric_id": "co2_emissions",
        "direction": "above",
        "threshold": 3.0,
        "category": "Environment",
        "issue": "High CO2 emissions",
        "recommendation": "Implement green energy policies and public transportation improvements",
        "priority": "medium",
    },
    "low_renewables": {
        "metric_id": "renewable_energy",
        "direction": "below",
        "threshold": 15.0,
        "category": "Environment",
        "issue": "Low renewable energy adoption",
        "recommendation": "Incentivize renewable energy projects and solar panel installations",
        "priority": "medium",
    },
    "low_internet": {
        "metric_id": "internet_penetration",
        "direction": "below",
        "threshold": 70.0,
        "category": "Infrastructure",
        "issue": "Low internet penetration",
        "recommendation": "Expand broadband infrastructure and digital literacy programs",
        "priority": "medium",
    },
}

SUCCESS_STORIES: tuple[PolicyInsight, ...] = (
    PolicyInsight(
        city_id="bangalore",
        category="Technology",
        issue="Tech hub development",
        recommendation="Successfully attracted major tech companies through infrastructure and policy support",
        priority="high",
        success_story=(
            "Bangalore transformed into India's Silicon Valley through strategic IT policies, "
            "startup incubators, and world-class educational institutions."
        ),
    ),
    PolicyInsight(
        city_id="mumbai",
        category="Financial Services",
        issue="Financial center growth",
        recommendation=(
            "Established as India's financial capital through regulatory reforms and "
            "infrastructure development"
        ),
        priority="high",
        success_story=(
            "Mumbai's financial district development created thousands of jobs and attracted "
            "global financial institutions."
        ),
    ),
    PolicyInsight(
        city_id="hyderabad",
        category="Healthcare",
        issue="Medical tourism",
        recommendation="Developed world-class healthcare facilities and medical tourism infrastructure",
        priority="medium",
        success_story=(
            "Hyderabad became a leading medical tourism destination through investment in "
            "healthcare infrastructure and international partnerships."
        ),
    ),
)

CITY_CLUSTERS: dict[str, tuple[str, ...]] = {
    "Tech Leaders": ("bangalore", "hyderabad"),
    "Financial Hubs": ("mumbai", "delhi"),
    "Manufacturing Centers": ("chennai", "pune"),
    "Cultural Heritage": ("jaipur", "lucknow"),
    "Port Cities": ("mumbai", "kolkata"),
    "Educational Hubs": ("bangalore", "pune", "hyderabad"),
}

SDG_ON_TRACK_PROGRESS = 80.0


@dataclass(frozen=True)
class ClusterProfile:
    name: str
    city_ids: tuple[str, ...]
    characteristics: tuple[str, ...]
    avg_performance: float


@dataclass(frozen=True)
class SdgGoal:
    """Progress of one Sustainable Development Goal; ``progress`` is a percentage."""

    id: str
    name: str
    target: float
    current: float
    progress: float

    @property
    def on_track(self) -> bool:
        return self.progress >= SDG_ON_TRACK_PROGRESS

    @property
    def status(self) -> str:
        return "On Track" if self.on_track else "Needs Attention"


CLUSTER_PROFILES: tuple[ClusterProfile, ...] = (
    ClusterProfile(
        name="High-Performance Tech Hubs",
        city_ids=("bangalore", "hyderabad"),
        characteristics=("High HDI", "Low unemployment", "High internet penetration"),
        avg_performance=85.0,
    ),
    ClusterProfile(
        name="Financial & Economic Centers",
        city_ids=("mumbai", "delhi"),
        characteristics=("High GDP", "High FDI", "Strong infrastructure"),
        avg_performance=78.0,
    ),
    ClusterProfile(
        name="Manufacturing & Industrial",
        city_ids=("chennai", "pune"),
        characteristics=("Moderate GDP", "Good infrastructure"),
        avg_performance=72.0,
    ),
)

SDG_GOALS: tuple[SdgGoal, ...] = (
    SdgGoal(id="sdg1", name="No Poverty", target=0.0, current=15.0, progress=75.0),
    SdgGoal(id="sdg3", name="Good Health & Well-being", target=100.0, current=75.0, progress=75.0),
    SdgGoal(id="sdg4", name="Quality Education", target=100.0, current=80.0, progress=80.0),
)


@dataclass
class ScoredCity:
    city_id: str
    city_name: str
    state: str
    score: float


@dataclass
class KeyInsights:
    """Leaderboards shown on the insights panel."""

    top_hdi: list[ScoredCity] = field(default_factory=list)
    highest_inequality: list[ScoredCity] = field(default_factory=list)
    best_healthcare: list[ScoredCity] = field(default_factory=list)
    environmental_leaders: list[ScoredCity] = field(default_factory=list)
    environmental_laggards: list[ScoredCity] = field(default_factory=list)


def _scored(cities: Iterable[City], score) -> list[ScoredCity]:
    return [
        ScoredCity(city_id=city.city_id, city_name=city.name, state=city.state, score=score(city))
        for city in cities
    ]


def key_insights(
    cities: Iterable[City],
    values_by_city: Mapping[str, Mapping[str, float]],
) -> KeyInsights:
    """Build the HDI, inequality, healthcare and environment leaderboards."""

    cities = tuple(cities)

    def metric(metric_id: str):
        return lambda city: values_by_city.get(city.city_id, {}).get(metric_id) or 0.0

    def by_score(item: ScoredCity) -> float:
        return item.score

    environment = top_n(
        _scored(cities, lambda c: environment_score(values_by_city.get(c.city_id, {}))),
        len(cities),
        by_score,
    )
    laggards = environment[-ENVIRONMENT_EDGE_COUNT:] if environment else []

    return KeyInsights(
        top_hdi=top_n(_scored(cities, metric("hdi")), TOP_HDI_COUNT, by_score),
        highest_inequality=top_n(
            _scored(cities, metric("gini_coefficient")), TOP_INEQUALITY_COUNT, by_score
        ),
        best_healthcare=top_n(
            _scored(cities, lambda c: healthcare_score(values_by_city.get(c.city_id, {}))),
            TOP_HEALTHCARE_COUNT,
            by_score,
        ),
        environmental_leaders=environment[:ENVIRONMENT_EDGE_COUNT],
        environmental_laggards=list(reversed(laggards)),
    )


def _policy_rule_fires(rule: Mapping, value: float | None) -> bool:
    if value is None:
        return False
    if rule["direction"] == "below":
        return value < rule["threshold"]
    return value > rule["threshold"]


def policy_insights(
    cities: Iterable[City],
    values_by_city: Mapping[str, Mapping[str, float]],
) -> list[PolicyInsight]:
    insights: list[PolicyInsight] = []
    for city in cities:
        city_values = values_by_city.get(city.city_id, {})
        for rule in POLICY_RULES.values():
            if _policy_rule_fires(rule, city_values.get(rule["metric_id"])):
                insights.append(
                    PolicyInsight(
                        city_id=city.city_id,
                        category=rule["category"],
                        issue=rule["issue"],
                        recommendation=rule["recommendation"],
                        priority=rule["priority"],
                    )
                )
    return insights


def insights_by_priority(
    insights: Iterable[PolicyInsight], priority: str
) -> list[PolicyInsight]:
    return [insight for insight in insights if insight.priority == priority]


def clusters_for_city(city_id: str) -> list[str]:
    return [name for name, members in CITY_CLUSTERS.items() if city_id in members]


def cluster_profiles_for_city(city_id: str) -> list[ClusterProfile]:
    return [profile for profile in CLUSTER_PROFILES if city_id in profile.city_ids]


def sdg_goals(on_track: bool | None = None) -> list[SdgGoal]:
    """All tracked goals, or only those on or off track."""

    if on_track is None:
        return list(SDG_GOALS)
    return [goal for goal in SDG_GOALS if goal.on_track == on_track]


__all__ = [
    "CITY_CLUSTERS",
    "CLUSTER_PROFILES",
    "ClusterProfile",
    "KeyInsights",
    "POLICY_RULES",
    "SDG_GOALS",
    "SUCCESS_STORIES",
    "SdgGoal",
    "ScoredCity",
    "cluster_profiles_for_city",
    "clusters_for_city",
    "insights_by_priority",
    "key_insights",
    "policy_insights",
    "sdg_goals",
]
