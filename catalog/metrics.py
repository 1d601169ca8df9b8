"""Static catalog of socio-economic metrics and their categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

METRIC_CATEGORIES: tuple[str, ...] = (
    "Economic",
    "Social",
    "Health",
    "Environment",
    "Governance",
    "Equality",
)

ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class Metric:
    """Definition of a single indicator shown on the dashboard."""

    id: str
    name: str
    category: str
    unit: str
    description: str
    source: str = ""
    last_updated: str = ""

    @property
    def bounds(self) -> tuple[float, float] | None:
        """Range implied by the unit, or ``None`` when the unit is unbounded."""

        if "%" in self.unit:
            return (0.0, 100.0)
        if "Index" in self.unit:
            if "0-100" in self.unit:
                return (0.0, 100.0)
            if "0-1" in self.unit:
                return (0.0, 1.0)
        return None

    def clamp(self, value: float) -> float:
        bounds = self.bounds
        if bounds is None:
            return value
        low, high = bounds
        return min(max(value, low), high)


def _metric(
    id: str,
    name: str,
    category: str,
    unit: str,
    description: str,
    source: str,
    last_updated: str = "2023",
) -> Metric:
    return Metric(
        id=id,
        name=name,
        category=category,
        unit=unit,
        description=description,
        source=source,
        last_updated=last_updated,
    )


METRICS: tuple[Metric, ...] = (
    # Economic
    _metric("gdp", "GDP", "Economic", "INR Crores", "Gross Domestic Product",
            "Ministry of Statistics and Programme Implementation"),
    _metric("gni", "GNI", "Economic", "INR Crores", "Gross National Income", "World Bank"),
    _metric("gdp_per_capita", "GDP per Capita", "Economic", "INR",
            "GDP divided by population", "World Bank", "2024"),
    _metric("unemployment", "Unemployment Rate", "Economic", "%",
            "Percentage of unemployed workforce", "Ministry of Labour and Employment"),
    _metric("inflation", "Inflation Rate", "Economic", "%",
            "Annual rate of inflation", "Reserve Bank of India"),
    _metric("fdi", "Foreign Direct Investment", "Economic", "INR Crores",
            "Foreign Direct Investment inflows",
            "Department for Promotion of Industry and Internal Trade"),
    _metric("trade_ratio", "Export/Import Ratio", "Economic", "Ratio",
            "Ratio of exports to imports", "Ministry of Commerce", "2024"),
    _metric("public_debt", "Public Debt as % of GDP", "Economic", "% of GDP",
            "Public debt as percentage of GDP", "Ministry of Finance"),
    # Social
    _metric("hdi", "Human Development Index (HDI)", "Social", "Index (0-1)",
            "Composite index of life expectancy, education, and per capita income", "UNDP"),
    _metric("life_expectancy", "Life Expectancy", "Social", "Years",
            "Average life expectancy at birth", "Ministry of Health and Family Welfare"),
    _metric("infant_mortality", "Infant Mortality Rate", "Social", "per 1000 births",
            "Deaths of infants under one year old", "Ministry of Health", "2024"),
    _metric("literacy", "Literacy Rate", "Social", "%",
            "Percentage of literate population", "Ministry of Education"),
    _metric("education_index", "Education Index", "Social", "Index (0-1)",
            "Composite index of education indicators", "Ministry of Education"),
    _metric("gender_inequality", "Gender Inequality Index", "Social", "Index (0-1)",
            "Measure of gender disparities", "UNDP"),
    _metric("population_growth", "Population Growth Rate", "Social", "%",
            "Annual population growth rate", "Census of India"),
    _metric("urban_population", "Urban Population %", "Social", "%",
            "Percentage of urban population", "Census of India"),
    # Health
    _metric("healthcare_expenditure", "Healthcare Expenditure per Capita", "Health",
            "INR per capita", "Per capita healthcare expenditure",
            "Ministry of Health and Family Welfare"),
    _metric("physicians", "Physicians per 1000 people", "Health", "per 1000 people",
            "Number of physicians per 1000 population", "World Health Organization"),
    _metric("hospital_beds", "Hospital Beds per 1000 people", "Health", "per 1000 people",
            "Number of hospital beds per 1000 population",
            "Ministry of Health and Family Welfare"),
    _metric("clean_water", "Access to Clean Water %", "Health", "%",
            "Percentage with access to clean drinking water", "WHO", "2024"),
    _metric("vaccination", "Vaccination Coverage %", "Health", "%",
            "Percentage of population with complete vaccination",
            "Ministry of Health and Family Welfare"),
    # Environment
    _metric("co2_emissions", "CO2 Emissions per Capita", "Environment", "tons per capita",
            "Carbon dioxide emissions per capita",
            "Ministry of Environment, Forest and Climate Change"),
    _metric("renewable_energy", "Renewable Energy %", "Environment", "%",
            "Percentage of renewable energy in total energy mix",
            "Ministry of New and Renewable Energy"),
    _metric("forest_area", "Forest Area %", "Environment", "%",
            "Percentage of land area covered by forests", "Forest Survey of India"),
    _metric("air_quality", "Air Quality Index", "Environment", "Index",
            "Air quality index", "Central Pollution Control Board"),
    _metric("environmental_performance", "Environmental Performance Index", "Environment",
            "Index (0-100)", "Environmental performance index",
            "Yale Center for Environmental Law & Policy"),
    # Governance
    _metric("corruption_index", "Corruption Perceptions Index", "Governance",
            "Index (0-100)", "Perceived levels of corruption", "Transparency International"),
    _metric("internet_penetration", "Internet Penetration %", "Governance", "%",
            "Percentage of population with internet access", "TRAI"),
    _metric("mobile_subscriptions", "Mobile Phone Subscriptions", "Governance",
            "per 100 people", "Number of mobile phone subscriptions per 100 people",
            "TRAI", "2024"),
    _metric("infrastructure_quality", "Infrastructure Quality Index", "Governance",
            "Index (1-7)", "Quality of infrastructure", "World Economic Forum"),
    _metric("political_stability", "Political Stability Index", "Governance",
            "Index (-2.5 to 2.5)", "Political stability and absence of violence",
            "World Bank"),
    # Equality
    _metric("gini_coefficient", "Gini Coefficient (Income Inequality)", "Equality",
            "Index (0-1)", "Income inequality measure", "NITI Aayog"),
    _metric("poverty_rate", "Poverty Rate", "Equality", "%",
            "Percentage of population below poverty line", "NITI Aayog", "2024"),
    _metric("social_protection", "Social Protection Coverage", "Equality", "%",
            "Percentage of population covered by social protection",
            "Ministry of Social Justice", "2024"),
)


def get_metric_by_id(metric_id: str, metrics: Iterable[Metric] = METRICS) -> Metric | None:
    for metric in metrics:
        if metric.id == metric_id:
            return metric
    return None


def iter_metrics(keys: Iterable[str] | None = None) -> Iterable[Metric]:
    if keys is None:
        return METRICS
    selected = []
    for key in keys:
        metric = get_metric_by_id(key)
        if metric:
            selected.append(metric)
    return tuple(selected)


__all__ = [
    "ALL_CATEGORIES",
    "METRIC_CATEGORIES",
    "METRICS",
    "Metric",
    "get_metric_by_id",
    "iter_metrics",
]
