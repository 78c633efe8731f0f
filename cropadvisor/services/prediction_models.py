"""
Value objects and errors shared by the prediction services.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional
import math


class PredictionEngineError(Exception):
    """Base class for prediction engine failures."""
    pass


class InvalidAreaError(PredictionEngineError, ValueError):
    """Raised when the cultivated area is not a finite, strictly positive number."""

    def __init__(self, area_hectares: float):
        self.area_hectares = area_hectares
        super().__init__(
            f"Cultivated area must be a finite number greater than 0 hectares (got {area_hectares})"
        )


class InvalidQuantityError(PredictionEngineError, ValueError):
    """Raised when an input or a derived quantity is NaN or infinite."""

    def __init__(self, name: str, value: float):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a finite number (got {value})")


def require_positive_area(area_hectares: float) -> None:
    """Reject zero/negative/non-finite area before any per-hectare division."""
    if area_hectares is None or not area_hectares > 0 or not math.isfinite(area_hectares):
        raise InvalidAreaError(area_hectares)


def require_finite(value: float, name: str) -> float:
    if value is None or not math.isfinite(value):
        raise InvalidQuantityError(name, value)
    return value


def fertilizer_rate_kg_ha(fertilizer_amount_kg: float, area_hectares: float) -> float:
    """Fertilizer applied per hectare."""
    require_positive_area(area_hectares)
    return require_finite(fertilizer_amount_kg / area_hectares, "Fertilizer rate")


@dataclass(frozen=True)
class FarmInput:
    """Farm parameters captured once at submission time."""
    crop: str
    area_hectares: float
    rainfall_mm: float
    temperature_c: float
    fertilizer_amount_kg: float
    selected_fertilizer: str = "urea"
    soil_type: str = ""  # informational only
    location: Optional[str] = None


@dataclass(frozen=True)
class FertilizerRecommendation:
    name: str
    amount_kg: int
    purpose: str
    unit: str = "kg"


@dataclass(frozen=True)
class OptimizationSuggestion:
    title: str
    description: str
    priority: str  # high, medium, low


@dataclass(frozen=True)
class PredictionResult:
    """Combined output of one engine run."""
    yield_tons_per_hectare: float
    crop: str
    fertilizer_recommendations: List[FertilizerRecommendation] = field(default_factory=list)
    optimization_suggestions: List[OptimizationSuggestion] = field(default_factory=list)
    crop_image: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
