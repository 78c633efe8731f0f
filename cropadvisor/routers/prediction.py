"""
Crop Prediction Router.
Provides endpoints for yield prediction, fertilizer planning and reports.
"""
from typing import Tuple
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
import io
import logging
import random

from cropadvisor.schemas.prediction_schemas import (
    CropListResponse,
    FarmInputRequest,
    FertilizerInfo,
    FertilizerListResponse,
    FertilizerRecommendationSchema,
    FieldHealthRequest,
    FieldHealthResponse,
    LocationListResponse,
    LocationPreset,
    OptimizationSuggestionSchema,
    PredictionResponse,
    PredictionResultSchema,
)
from cropadvisor.services.crop_reference_data import (
    FERTILIZER_TYPES,
    LOCATION_PRESETS,
    get_available_crops,
    get_location_preset,
)
from cropadvisor.services.field_health import SensorReading, summarize_field_health
from cropadvisor.services.prediction_engine import prediction_engine
from cropadvisor.services.prediction_excel_service import prediction_excel_service
from cropadvisor.services.prediction_models import FarmInput, PredictionEngineError, PredictionResult
from cropadvisor.services.prediction_pdf_service import create_prediction_pdf_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prediction", tags=["prediction"])
health_router = APIRouter(prefix="/api", tags=["field-health"])


def _run_prediction(request: FarmInputRequest) -> Tuple[FarmInput, PredictionResult]:
    """Build the immutable input, run the engine, translate engine errors."""
    farm_input = request.to_farm_input()
    rng = random.Random(request.seed) if request.seed is not None else None
    try:
        result = prediction_engine.run(
            farm_input,
            rng=rng,
            prioritize_suggestions=request.prioritize_suggestions,
        )
    except PredictionEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return farm_input, result


def _report_filename(result: PredictionResult, extension: str) -> str:
    crop_slug = "".join(ch if ch.isalnum() else "_" for ch in result.crop.lower()).strip("_") or "crop"
    return f"yield_prediction_{crop_slug}.{extension}"


@router.post("/predict", response_model=PredictionResponse)
async def predict_yield(request: FarmInputRequest):
    """
    Predict crop yield and build the fertilizer plan and optimization suggestions.
    """
    _, result = _run_prediction(request)

    return PredictionResponse(
        status="success",
        result=PredictionResultSchema(
            yield_tons_per_hectare=result.yield_tons_per_hectare,
            crop=result.crop,
            crop_image=result.crop_image,
            fertilizer_recommendations=[
                FertilizerRecommendationSchema(
                    name=rec.name,
                    amount=rec.amount_kg,
                    unit=rec.unit,
                    purpose=rec.purpose,
                )
                for rec in result.fertilizer_recommendations
            ],
        ),
        suggestions=[
            OptimizationSuggestionSchema(
                title=s.title,
                description=s.description,
                priority=s.priority,
            )
            for s in result.optimization_suggestions
        ],
    )


@router.get("/crops", response_model=CropListResponse)
async def list_crops():
    """Supported crops with yield multiplier and N-P-K baseline."""
    return {"crops": get_available_crops()}


@router.get("/fertilizers", response_model=FertilizerListResponse)
async def list_fertilizers():
    return FertilizerListResponse(fertilizers=[
        FertilizerInfo(id=fert_id, label=info["label"], npk=info["npk"])
        for fert_id, info in FERTILIZER_TYPES.items()
    ])


@router.get("/locations", response_model=LocationListResponse)
async def list_locations():
    """District presets used to prefill rainfall, temperature and soil type."""
    return {"locations": LOCATION_PRESETS}


@router.get("/locations/{name}", response_model=LocationPreset)
async def get_location(name: str):
    preset = get_location_preset(name)
    if not preset:
        raise HTTPException(status_code=404, detail=f"Location '{name}' not found")
    return preset


@router.post("/export/excel")
async def export_prediction_excel(request: FarmInputRequest):
    """Run a prediction and download it as an Excel workbook."""
    farm_input, result = _run_prediction(request)
    try:
        buffer = prediction_excel_service.generate_prediction_excel(farm_input, result)
    except Exception as e:
        logger.error(f"Excel export failed: {e}")
        raise HTTPException(status_code=500, detail="Could not generate Excel report")
    filename = _report_filename(result, "xlsx")
    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/export/pdf")
async def export_prediction_pdf(request: FarmInputRequest):
    """Run a prediction and download it as a PDF report."""
    farm_input, result = _run_prediction(request)
    try:
        pdf_bytes = create_prediction_pdf_report(farm_input, result)
    except Exception as e:
        logger.error(f"PDF export failed: {e}")
        raise HTTPException(status_code=500, detail="Could not generate PDF report")
    filename = _report_filename(result, "pdf")
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@health_router.post("/field-health", response_model=FieldHealthResponse)
async def field_health(request: FieldHealthRequest):
    """Summarize sensor statuses into a 0-100 field health score."""
    readings = [
        SensorReading(
            id=s.id,
            name=s.name,
            value=s.value,
            unit=s.unit,
            status=s.status.value,
            threshold_min=s.threshold.min if s.threshold else None,
            threshold_max=s.threshold.max if s.threshold else None,
        )
        for s in request.sensors
    ]
    return summarize_field_health(readings).to_dict()
