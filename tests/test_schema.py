import pytest
from pydantic import ValidationError

from pipelines.model import Anomaly, CityMetricValue, PredictionPoint, TimeSeriesPoint


def test_city_metric_value_serialization_roundtrip():
    value = CityMetricValue(city_id=" mumbai ", metric_id="hdi", value=1)

    assert value.city_id == "mumbai"
    assert value.value == pytest.approx(1.0)

    serialized = value.model_dump()
    assert serialized == {"city_id": "mumbai", "metric_id": "hdi", "value": 1.0}


def test_city_metric_value_requires_numeric_value():
    with pytest.raises(ValueError):
        CityMetricValue(city_id="delhi", metric_id="gdp", value="not-a-number")


def test_records_are_immutable():
    point = TimeSeriesPoint(city_id="pune", metric_id="gdp", year=2021, value=10.5)

    with pytest.raises(ValidationError):
        point.value = 11.0


def test_prediction_confidence_is_bounded():
    with pytest.raises(ValidationError):
        PredictionPoint(year=2024, predicted=5.0, confidence=1.5)


def test_anomaly_serializes_expected_range_as_pair():
    anomaly = Anomaly(
        city_id="delhi",
        metric_id="co2_emissions",
        value=4.5,
        expected_range=(0, 4),
        severity="high",
        type="performance",
        description="Excessive CO2 emissions",
    )

    payload = anomaly.model_dump(mode="json")
    assert payload["expected_range"] == [0.0, 4.0]
    assert payload["z_score"] is None


def test_anomaly_rejects_unknown_severity():
    with pytest.raises(ValidationError):
        Anomaly(
            city_id="delhi",
            metric_id="gdp",
            value=1.0,
            expected_range=(0, 1),
            severity="critical",
            type="outlier",
            description="x",
        )
