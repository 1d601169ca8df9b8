"""In-process surface the presentation layer calls into."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from analytics import aggregation, anomalies, insights, scenarios, trends
from analytics.statistics import correlation
from catalog.cities import City
from catalog.metrics import ALL_CATEGORIES, Metric
from pipelines.common import RandomSource
from pipelines.model import Anomaly, PolicyInsight, PredictionPoint, RankedRow
from storage.exports import export_rows
from storage.store import MetricStore
from dashboard.settings import DashboardSettings, settings_from_env

logger = logging.getLogger(__name__)

DEFAULT_SCATTER_X = "gdp_per_capita"
DEFAULT_SCATTER_Y = "hdi"


class Dashboard:
    """Read-only queries over an initialized :class:`MetricStore`."""

    def __init__(self, store: MetricStore, settings: DashboardSettings | None = None) -> None:
        self.store = store
        self.settings = settings or DashboardSettings(cities=store.cities, metrics=store.metrics)

    def get_cities(self) -> list[City]:
        return list(self.store.cities)

    def get_metrics(self) -> list[Metric]:
        return list(self.store.metrics)

    def get_value(self, city_id: str, metric_id: str) -> float:
        """Current value, or 0 when the pair is unknown."""

        return self.store.lookup_value(city_id, metric_id) or 0.0

    def lookup_value(self, city_id: str, metric_id: str) -> float | None:
        return self.store.lookup_value(city_id, metric_id)

    def get_series(self, city_id: str, metric_id: str) -> list[dict[str, float]]:
        return [
            {"year": point.year, "value": point.value}
            for point in self.store.series(city_id, metric_id)
        ]

    def filter_cities(self, term: str | None = None) -> list[City]:
        return aggregation.filter_cities(self.store.cities, term)

    def filter_metrics(
        self, category: str | None = ALL_CATEGORIES, term: str | None = None
    ) -> list[Metric]:
        return aggregation.filter_metrics(self.store.metrics, category, term)

    def rank(self, metric_id: str, order: str = "desc") -> list[RankedRow]:
        return aggregation.rank(
            self.store.cities, self.store.values_for_metric(metric_id), order
        )

    def _values_by_metric(self) -> dict[str, dict[str, float]]:
        table: dict[str, dict[str, float]] = {}
        for item in self.store.all_values():
            table.setdefault(item.metric_id, {})[item.city_id] = item.value
        return table

    def _values_by_city(self) -> dict[str, dict[str, float]]:
        table: dict[str, dict[str, float]] = {}
        for item in self.store.all_values():
            table.setdefault(item.city_id, {})[item.metric_id] = item.value
        return table

    def detect_anomalies(self) -> list[Anomaly]:
        found = anomalies.detect_anomalies(
            self._values_by_metric(), self.store.cities, self.store.metrics
        )
        logger.info("Anomaly scan flagged %s entries.", len(found))
        return found

    def predict(
        self, city_id: str, metric_id: str, horizon_years: int | None = None
    ) -> list[PredictionPoint]:
        horizon = self.settings.prediction_horizon if horizon_years is None else horizon_years
        return trends.predict(self.store.series(city_id, metric_id), horizon)

    def trend_direction(self, city_id: str, metric_id: str) -> trends.TrendDirection:
        return trends.trend_direction(self.predict(city_id, metric_id))

    def export_rows(
        self, city_ids: Sequence[str], metric_ids: Sequence[str]
    ) -> list[dict[str, Any]]:
        return export_rows(self.store, city_ids, metric_ids)

    def key_insights(self) -> insights.KeyInsights:
        return insights.key_insights(self.store.cities, self._values_by_city())

    def policy_insights(self) -> list[PolicyInsight]:
        return insights.policy_insights(self.store.cities, self._values_by_city())

    def cluster_profiles(self, city_id: str | None = None) -> list[insights.ClusterProfile]:
        if city_id is None:
            return list(insights.CLUSTER_PROFILES)
        return insights.cluster_profiles_for_city(city_id)

    def sdg_goals(self, on_track: bool | None = None) -> list[insights.SdgGoal]:
        return insights.sdg_goals(on_track)

    def heatmap(
        self,
        city_ids: Sequence[str] | None = None,
        metric_ids: Sequence[str] | None = None,
    ) -> list[dict[str, Any]]:
        return aggregation.heatmap(
            self.store.cities,
            self.store.metrics,
            self._values_by_city(),
            city_ids=city_ids,
            metric_ids=metric_ids,
        )

    def series_table(self, city_ids: Sequence[str], metric_id: str) -> list[dict[str, Any]]:
        return aggregation.series_table(
            {city_id: self.store.series(city_id, metric_id) for city_id in city_ids}
        )

    def scatter(
        self,
        city_ids: Sequence[str],
        x_metric: str = DEFAULT_SCATTER_X,
        y_metric: str = DEFAULT_SCATTER_Y,
    ) -> dict[str, Any]:
        wanted = set(city_ids)
        selected = [city for city in self.store.cities if city.city_id in wanted]
        points = aggregation.scatter_points(
            selected,
            self.store.values_for_metric(x_metric),
            self.store.values_for_metric(y_metric),
        )
        return {
            "x_metric": x_metric,
            "y_metric": y_metric,
            "points": points,
            "correlation": correlation([p["x"] for p in points], [p["y"] for p in points]),
        }

    def apply_scenario(self, name: str) -> dict[str, dict[str, float]]:
        scenario = scenarios.get_scenario(name)
        return scenarios.apply_scenario(scenario, self._values_by_city(), self.store.metrics)


def build_dashboard(
    settings: DashboardSettings | None = None,
    rng: RandomSource = None,
) -> Dashboard:
    """Construct and initialize a store, then wrap it.

    ``rng`` takes precedence over ``settings.seed``; with neither, values are unseeded.
    """

    settings = settings or settings_from_env()
    source = rng if rng is not None else settings.seed
    store = MetricStore(settings.cities, settings.metrics, years=settings.years, rng=source)
    store.initialize()
    return Dashboard(store, settings)


__all__ = ["Dashboard", "build_dashboard"]
