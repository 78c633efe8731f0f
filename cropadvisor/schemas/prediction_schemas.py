"""
Pydantic schemas for the crop prediction API.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from enum import Enum

from cropadvisor.services.prediction_models import FarmInput


# ==================== ENUMS ====================

class FertilizerTypeEnum(str, Enum):
    """Primary fertilizer ids."""
    UREA = "urea"
    DAP = "dap"
    MOP = "mop"
    NPK = "npk"
    SSP = "ssp"
    ORGANIC = "organic"


class PriorityEnum(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SensorStatusEnum(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


# ==================== PREDICTION SCHEMAS ====================

class FarmInputRequest(BaseModel):
    """Farm parameters submitted for prediction."""
    location: Optional[str] = Field(None, max_length=100, description="District preset used to prefill the form")
    crop: str = Field(..., min_length=1, max_length=50, description="Crop label, e.g. Rice or Cotton(lint)")
    area_hectares: float = Field(..., gt=0, allow_inf_nan=False, description="Cultivated area in hectares")
    rainfall_mm: float = Field(..., ge=0, allow_inf_nan=False, description="Annual rainfall in mm")
    temperature_c: float = Field(..., allow_inf_nan=False, description="Average temperature in °C")
    soil_type: str = Field(default="", max_length=100, description="Soil type (informational)")
    selected_fertilizer: str = Field(default=FertilizerTypeEnum.UREA.value, max_length=30, description="Primary fertilizer id")
    fertilizer_amount_kg: float = Field(..., gt=0, allow_inf_nan=False, description="Total fertilizer applied in kg")
    prioritize_suggestions: bool = Field(default=False, description="Sort suggestions by priority before the 4-item cap")
    seed: Optional[int] = Field(None, description="Seed for reproducible yield noise (same seed, same report)")

    def to_farm_input(self) -> FarmInput:
        return FarmInput(
            crop=self.crop,
            area_hectares=self.area_hectares,
            rainfall_mm=self.rainfall_mm,
            temperature_c=self.temperature_c,
            fertilizer_amount_kg=self.fertilizer_amount_kg,
            selected_fertilizer=self.selected_fertilizer,
            soil_type=self.soil_type,
            location=self.location,
        )


class FertilizerRecommendationSchema(BaseModel):
    """One row of the fertilizer plan."""
    name: str
    amount: int = Field(ge=0)
    unit: str = "kg"
    purpose: str


class OptimizationSuggestionSchema(BaseModel):
    title: str
    description: str
    priority: PriorityEnum


class PredictionResultSchema(BaseModel):
    """Yield prediction with fertilizer plan."""
    yield_tons_per_hectare: float = Field(gt=0)
    crop: str
    crop_image: str = ""
    fertilizer_recommendations: List[FertilizerRecommendationSchema]


class PredictionResponse(BaseModel):
    """Response schema for a prediction."""
    status: str = "success"
    result: PredictionResultSchema
    suggestions: List[OptimizationSuggestionSchema]


# ==================== REFERENCE DATA SCHEMAS ====================

class CropInfo(BaseModel):
    id: str
    name: str
    yield_multiplier: float
    nutrient_requirement_kg_ha: Dict[str, float]
    image: str


class CropListResponse(BaseModel):
    crops: List[CropInfo]


class FertilizerInfo(BaseModel):
    id: str
    label: str
    npk: str


class FertilizerListResponse(BaseModel):
    fertilizers: List[FertilizerInfo]


class LocationPreset(BaseModel):
    """Climate and soil defaults for a district."""
    name: str
    rainfall: float
    avg_temp: float
    soil_type: str


class LocationListResponse(BaseModel):
    locations: List[LocationPreset]


# ==================== FIELD HEALTH SCHEMAS ====================

class SensorThreshold(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class SensorReadingSchema(BaseModel):
    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    value: float
    unit: str = Field(default="", max_length=20)
    status: SensorStatusEnum
    threshold: Optional[SensorThreshold] = None


class FieldHealthRequest(BaseModel):
    sensors: List[SensorReadingSchema] = Field(default_factory=list)


class FieldHealthResponse(BaseModel):
    score: int = Field(ge=0, le=100)
    condition: str
    alert_count: int = Field(ge=0)
    sensor_count: int = Field(ge=0)
