"""
Field health summary from sensor readings.

Each reading carries a status (good, warning, critical). The score is the
rounded mean of the status scores; an empty reading list scores 0.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

STATUS_SCORES = {
    "good": 100,
    "warning": 60,
    "critical": 20,
}

ALERT_STATUSES = ("warning", "critical")

# (minimum score, label), checked top-down
CONDITION_THRESHOLDS = [
    (80, "Excellent condition"),
    (60, "Good condition"),
    (40, "Fair condition"),
]


@dataclass
class SensorReading:
    id: str
    name: str
    value: float
    unit: str
    status: str
    threshold_min: Optional[float] = None
    threshold_max: Optional[float] = None


@dataclass
class FieldHealthSummary:
    score: int
    condition: str
    alert_count: int
    sensor_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_health_condition(score: int) -> str:
    if score == 0:
        return "No data"
    for minimum, label in CONDITION_THRESHOLDS:
        if score >= minimum:
            return label
    return "Needs attention"


def calculate_health_score(readings: List[SensorReading]) -> int:
    if not readings:
        return 0
    total = 0
    for reading in readings:
        if reading.status not in STATUS_SCORES:
            raise ValueError(f"Unknown sensor status '{reading.status}' for sensor {reading.id}")
        total += STATUS_SCORES[reading.status]
    return round(total / len(readings))


def summarize_field_health(readings: Iterable[SensorReading]) -> FieldHealthSummary:
    readings = list(readings)
    score = calculate_health_score(readings)
    return FieldHealthSummary(
        score=score,
        condition=get_health_condition(score),
        alert_count=sum(1 for r in readings if r.status in ALERT_STATUSES),
        sensor_count=len(readings),
    )
