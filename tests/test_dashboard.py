import logging
import math

import numpy as np
import pytest

from catalog.metrics import get_metric_by_id
from dashboard.core import Dashboard, build_dashboard
from dashboard.settings import DashboardSettings, settings_from_env
from storage.store import MetricStore


def test_every_value_is_finite_and_within_unit_bounds(dashboard):
    for city in dashboard.get_cities():
        for metric in dashboard.get_metrics():
            value = dashboard.get_value(city.city_id, metric.id)
            assert math.isfinite(value)
            if metric.bounds is not None:
                low, high = metric.bounds
                assert low <= value <= high


def test_unknown_identifiers_default(dashboard):
    assert dashboard.get_value("atlantis", "gdp") == 0.0
    assert dashboard.get_value("mumbai", "happiness") == 0.0
    assert dashboard.lookup_value("mumbai", "happiness") is None
    assert dashboard.get_series("atlantis", "gdp") == []
    assert dashboard.predict("atlantis", "gdp") == []


def test_series_has_five_ascending_years(dashboard):
    series = dashboard.get_series("chennai", "literacy")

    assert [point["year"] for point in series] == [2019, 2020, 2021, 2022, 2023]
    assert all(0 <= point["value"] <= 100 for point in series)


def test_seeded_builds_are_reproducible():
    first = build_dashboard(DashboardSettings(seed=42))
    second = build_dashboard(DashboardSettings(seed=42))
    try:
        assert first.export_rows(["delhi", "jaipur"], ["hdi", "gdp"]) == second.export_rows(
            ["delhi", "jaipur"], ["hdi", "gdp"]
        )
        assert first.get_series("delhi", "gdp") == second.get_series("delhi", "gdp")
    finally:
        first.store.close()
        second.store.close()


def test_explicit_generator_overrides_seed():
    board = build_dashboard(DashboardSettings(seed=1), rng=np.random.default_rng(5))
    reference = build_dashboard(DashboardSettings(seed=5))
    try:
        assert board.get_value("pune", "hdi") == reference.get_value("pune", "hdi")
    finally:
        board.store.close()
        reference.store.close()


def test_reload_regenerates_values():
    store = MetricStore(rng=11).initialize()
    try:
        before = store.values_for_metric("gdp")
        store.reload()
        after = store.values_for_metric("gdp")
        assert set(before) == set(after)
        assert before != after
        assert len(store.all_values()) == len(store.cities) * len(store.metrics)
    finally:
        store.close()


def test_rank_and_predict_through_facade(dashboard):
    rows = dashboard.rank("hdi")
    values = [row.value for row in rows]

    assert values == sorted(values, reverse=True)
    assert rows[0].value == dashboard.get_value(rows[0].city_id, "hdi")

    predictions = dashboard.predict("mumbai", "gdp", 4)
    assert len(predictions) == 9
    future = [p.confidence for p in predictions if p.predicted is not None]
    assert future == pytest.approx([0.8, 0.6, 0.4, 0.3])
    assert dashboard.trend_direction("mumbai", "gdp") in {"increasing", "decreasing", "stable"}


def test_default_horizon_comes_from_settings():
    board = build_dashboard(DashboardSettings(seed=3, prediction_horizon=2))
    try:
        predictions = board.predict("delhi", "literacy")
        assert [p.year for p in predictions if p.predicted is not None] == [2024, 2025]
    finally:
        board.store.close()


def test_detect_anomalies_only_on_populated_metrics(dashboard):
    found = dashboard.detect_anomalies()

    for anomaly in found:
        assert get_metric_by_id(anomaly.metric_id) is not None
        if anomaly.type == "outlier":
            assert abs(anomaly.z_score) >= 2


def test_facade_views(dashboard):
    assert [c.city_id for c in dashboard.filter_cities("bengal")] == ["kolkata"]
    assert {m.category for m in dashboard.filter_metrics("Environment")} == {"Environment"}

    insights = dashboard.key_insights()
    assert len(insights.top_hdi) == 10
    assert len(insights.environmental_leaders) == 3

    for insight in dashboard.policy_insights():
        assert insight.priority in {"high", "medium"}

    scatter = dashboard.scatter(["mumbai", "delhi", "pune", "jaipur"])
    assert len(scatter["points"]) == 4
    assert abs(scatter["correlation"]) <= 1.0 + 1e-9

    table = dashboard.series_table(["mumbai", "delhi"], "gdp")
    assert [row["year"] for row in table] == [2019, 2020, 2021, 2022, 2023]
    assert set(table[0]) == {"year", "mumbai", "delhi"}

    assert len(dashboard.heatmap()) == 10
    projected = dashboard.apply_scenario("Healthcare Boost")
    assert set(projected["pune"]) == {"healthcare_expenditure", "physicians"}

    assert [p.name for p in dashboard.cluster_profiles("mumbai")] == [
        "Financial & Economic Centers"
    ]
    assert len(dashboard.cluster_profiles()) == 3
    assert [g.id for g in dashboard.sdg_goals(on_track=True)] == ["sdg4"]


def test_dashboard_wraps_existing_store():
    store = MetricStore(rng=8).initialize()
    try:
        board = Dashboard(store)
        assert board.settings.cities == store.cities
        assert board.get_value("pune", "gdp") == store.lookup_value("pune", "gdp")
    finally:
        store.close()


def test_settings_from_env(monkeypatch, caplog):
    monkeypatch.setenv("DASHBOARD_SEED", "7")
    monkeypatch.setenv("DASHBOARD_START_YEAR", "2018")
    monkeypatch.setenv("DASHBOARD_END_YEAR", "2022")
    monkeypatch.setenv("DASHBOARD_PREDICTION_HORIZON", "5")
    monkeypatch.setenv("DASHBOARD_CITIES", "pune, atlantis ,delhi")
    monkeypatch.delenv("DASHBOARD_METRICS", raising=False)

    with caplog.at_level(logging.WARNING):
        settings = settings_from_env()

    assert settings.seed == 7
    assert settings.years == (2018, 2019, 2020, 2021, 2022)
    assert settings.prediction_horizon == 5
    assert [c.city_id for c in settings.cities] == ["pune", "delhi"]
    assert "atlantis" in caplog.text


def test_settings_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("DASHBOARD_SEED", "abc")
    monkeypatch.setenv("DASHBOARD_CITIES", "atlantis")
    monkeypatch.setenv("DASHBOARD_METRICS", "happiness")
    monkeypatch.setenv("DASHBOARD_START_YEAR", "2023")
    monkeypatch.setenv("DASHBOARD_END_YEAR", "2020")
    monkeypatch.delenv("DASHBOARD_PREDICTION_HORIZON", raising=False)

    settings = settings_from_env()

    assert settings.seed is None
    assert len(settings.cities) == 10
    assert len(settings.metrics) == 34
    assert settings.years == (2023,)
    assert settings.prediction_horizon == 3


def test_metric_selection_from_env_limits_the_store(monkeypatch, caplog):
    monkeypatch.delenv("DASHBOARD_CITIES", raising=False)
    monkeypatch.setenv("DASHBOARD_METRICS", "hdi, happiness,gdp")
    monkeypatch.setenv("DASHBOARD_SEED", "9")

    with caplog.at_level(logging.WARNING):
        settings = settings_from_env()

    assert [m.id for m in settings.metrics] == ["hdi", "gdp"]
    assert "happiness" in caplog.text

    board = build_dashboard(settings)
    try:
        assert [m.id for m in board.get_metrics()] == ["hdi", "gdp"]
        assert len(board.store.all_values()) == len(board.get_cities()) * 2
        assert board.lookup_value("mumbai", "literacy") is None
    finally:
        board.store.close()
