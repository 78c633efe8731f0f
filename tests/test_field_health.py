"""
Tests for the field health summary.

Status scores: good=100, warning=60, critical=20. The field score is the
rounded mean; conditions are banded at 80/60/40.
"""
import pytest
from cropadvisor.services.field_health import (
    SensorReading,
    calculate_health_score,
    get_health_condition,
    summarize_field_health,
)


def reading(status, sensor_id="s1"):
    return SensorReading(id=sensor_id, name="Soil Moisture", value=42.0, unit="%", status=status)


class TestHealthScore:

    @pytest.mark.parametrize("statuses,expected", [
        (["good"], 100),
        (["warning"], 60),
        (["critical"], 20),
        (["critical", "warning"], 40),
        (["good", "warning", "critical"], 60),
        (["good", "good", "warning"], 87),
    ])
    def test_mean_of_status_scores(self, statuses, expected):
        readings = [reading(s, f"s{i}") for i, s in enumerate(statuses)]
        assert calculate_health_score(readings) == expected

    def test_empty_readings(self):
        assert calculate_health_score([]) == 0

    def test_unknown_status(self):
        with pytest.raises(ValueError):
            calculate_health_score([reading("offline")])


class TestHealthCondition:

    @pytest.mark.parametrize("score,expected", [
        (0, "No data"),
        (100, "Excellent condition"),
        (80, "Excellent condition"),
        (79, "Good condition"),
        (60, "Good condition"),
        (40, "Fair condition"),
        (39, "Needs attention"),
        (20, "Needs attention"),
    ])
    def test_condition_bands(self, score, expected):
        assert get_health_condition(score) == expected


class TestSummary:

    def test_summary_counts_alerts(self):
        summary = summarize_field_health([
            reading("good", "moisture"),
            reading("warning", "ph"),
            reading("critical", "nitrogen"),
        ])

        assert summary.to_dict() == {
            "score": 60,
            "condition": "Good condition",
            "alert_count": 2,
            "sensor_count": 3,
        }

    def test_summary_accepts_generators(self):
        summary = summarize_field_health(reading("good", str(i)) for i in range(4))
        assert summary.score == 100
        assert summary.alert_count == 0
