"""Environment-driven configuration for building a dashboard session."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from catalog.cities import CITIES, City, iter_cities
from catalog.metrics import METRICS, Metric, iter_metrics
from pipelines.profiles import DEFAULT_YEARS

load_dotenv()

logger = logging.getLogger(__name__)

SEED_ENV = "DASHBOARD_SEED"
START_YEAR_ENV = "DASHBOARD_START_YEAR"
END_YEAR_ENV = "DASHBOARD_END_YEAR"
HORIZON_ENV = "DASHBOARD_PREDICTION_HORIZON"
CITIES_ENV = "DASHBOARD_CITIES"
METRICS_ENV = "DASHBOARD_METRICS"

DEFAULT_HORIZON = 3


@dataclass(frozen=True)
class DashboardSettings:
    """Resolved settings for one dashboard session."""

    seed: int | None = None
    start_year: int = DEFAULT_YEARS[0]
    end_year: int = DEFAULT_YEARS[-1]
    prediction_horizon: int = DEFAULT_HORIZON
    cities: tuple[City, ...] = CITIES
    metrics: tuple[Metric, ...] = METRICS

    @property
    def years(self) -> tuple[int, ...]:
        return tuple(range(self.start_year, self.end_year + 1))


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"))


def _int_from_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("%s=%s is not an integer; using %s.", name, raw, default)
        return default


def _cities_from_env() -> tuple[City, ...]:
    requested = os.getenv(CITIES_ENV)
    if not requested:
        return CITIES

    keys = [key.strip() for key in requested.split(",") if key.strip()]
    selected = tuple(iter_cities(keys))
    unknown = set(keys) - {city.city_id for city in selected}
    if unknown:
        logger.warning("Ignoring unknown city keys: %s", ", ".join(sorted(unknown)))
    if selected:
        return selected
    logger.warning(
        "%s=%s did not match any configured cities; falling back to defaults.",
        CITIES_ENV,
        requested,
    )
    return CITIES


def _metrics_from_env() -> tuple[Metric, ...]:
    requested = os.getenv(METRICS_ENV)
    if not requested:
        return METRICS

    keys = [key.strip() for key in requested.split(",") if key.strip()]
    selected = tuple(iter_metrics(keys))
    unknown = set(keys) - {metric.id for metric in selected}
    if unknown:
        logger.warning("Ignoring unknown metric ids: %s", ", ".join(sorted(unknown)))
    if selected:
        return selected
    logger.warning(
        "%s=%s did not match any catalog metrics; falling back to defaults.",
        METRICS_ENV,
        requested,
    )
    return METRICS


def settings_from_env() -> DashboardSettings:
    start_year = _int_from_env(START_YEAR_ENV, DEFAULT_YEARS[0])
    end_year = _int_from_env(END_YEAR_ENV, DEFAULT_YEARS[-1])
    if end_year < start_year:
        logger.warning(
            "%s=%s is before %s=%s; using a single year.",
            END_YEAR_ENV,
            end_year,
            START_YEAR_ENV,
            start_year,
        )
        end_year = start_year

    horizon = _int_from_env(HORIZON_ENV, DEFAULT_HORIZON)
    if horizon < 0:
        logger.warning("%s=%s is negative; using %s.", HORIZON_ENV, horizon, DEFAULT_HORIZON)
        horizon = DEFAULT_HORIZON

    return DashboardSettings(
        seed=_int_from_env(SEED_ENV, None),
        start_year=start_year,
        end_year=end_year,
        prediction_horizon=horizon,
        cities=_cities_from_env(),
        metrics=_metrics_from_env(),
    )


__all__ = [
    "CITIES_ENV",
    "METRICS_ENV",
    "DashboardSettings",
    "END_YEAR_ENV",
    "HORIZON_ENV",
    "SEED_ENV",
    "START_YEAR_ENV",
    "configure_logging",
    "settings_from_env",
]
