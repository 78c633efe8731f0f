"""
Crop Prediction Engine.

Combines the fertilizer planner, yield estimator and optimization advisor
into a single call:

1. Validate the cultivated area (fail fast, no partial results)
2. Build the fertilizer dosage table
3. Estimate yield with the injected (or default) random source
4. Evaluate optimization rules against the unrounded yield
5. Assemble the PredictionResult

The engine holds no state between calls; the collaborating services are
stateless and the reference tables are read-only.
"""
from typing import Optional
import logging

from cropadvisor.services.crop_reference_data import (
    SUPPORTED_CROPS,
    get_crop_image,
    normalize_crop_name,
)
from cropadvisor.services.fertilizer_planner import FertilizerPlanner, fertilizer_planner
from cropadvisor.services.optimization_advisor import OptimizationAdvisor, optimization_advisor
from cropadvisor.services.prediction_models import (
    FarmInput,
    PredictionResult,
    require_finite,
    require_positive_area,
)
from cropadvisor.services.yield_estimator import YieldEstimator, yield_estimator

logger = logging.getLogger(__name__)


class PredictionEngine:
    """Facade over the planner, estimator and advisor."""

    def __init__(
        self,
        planner: Optional[FertilizerPlanner] = None,
        estimator: Optional[YieldEstimator] = None,
        advisor: Optional[OptimizationAdvisor] = None,
    ):
        self.planner = planner or fertilizer_planner
        self.estimator = estimator or yield_estimator
        self.advisor = advisor or optimization_advisor

    def run(
        self,
        farm_input: FarmInput,
        rng=None,
        prioritize_suggestions: bool = False,
    ) -> PredictionResult:
        """
        Perform a complete prediction.

        Args:
            farm_input: Immutable farm parameters
            rng: Optional random source for yield noise (e.g. random.Random(42))
            prioritize_suggestions: Sort suggestions by priority before capping

        Returns:
            PredictionResult with yield, fertilizer plan and suggestions.

        Raises:
            InvalidAreaError: if farm_input.area_hectares is not a finite number > 0
            InvalidQuantityError: if another input or a fertilizer dose is not finite
        """
        require_positive_area(farm_input.area_hectares)
        require_finite(farm_input.rainfall_mm, "Rainfall")
        require_finite(farm_input.temperature_c, "Temperature")
        require_finite(farm_input.fertilizer_amount_kg, "Fertilizer amount")
        crop = normalize_crop_name(farm_input.crop)
        if crop not in SUPPORTED_CROPS:
            logger.debug(f"Unknown crop '{farm_input.crop}', using default multiplier and N-P-K baseline")

        recommendations = self.planner.plan(
            crop, farm_input.area_hectares, farm_input.selected_fertilizer
        )

        raw_yield = self.estimator.estimate_raw(
            crop,
            farm_input.rainfall_mm,
            farm_input.temperature_c,
            farm_input.fertilizer_amount_kg,
            farm_input.area_hectares,
            rng=rng,
        )

        suggestions = self.advisor.advise(
            crop,
            farm_input.area_hectares,
            farm_input.rainfall_mm,
            farm_input.temperature_c,
            farm_input.fertilizer_amount_kg,
            raw_yield,
            prioritize=prioritize_suggestions,
        )

        result = PredictionResult(
            yield_tons_per_hectare=round(raw_yield, 1),
            crop=crop,
            fertilizer_recommendations=recommendations,
            optimization_suggestions=suggestions,
            crop_image=get_crop_image(crop),
        )

        logger.info(
            f"Prediction: crop={crop}, area={farm_input.area_hectares} ha, "
            f"yield={result.yield_tons_per_hectare} t/ha, "
            f"fertilizers={len(recommendations)}, suggestions={len(suggestions)}"
        )
        return result


# Singleton instance
prediction_engine = PredictionEngine()
