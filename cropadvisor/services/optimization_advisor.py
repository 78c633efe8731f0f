"""
Optimization Advisor Service.

Evaluates a fixed sequence of agronomic rules against the farm inputs and
the predicted yield. Rules fire in this order:

1. Rainfall: < 800 mm drip irrigation, else > 2500 mm drainage
2. Temperature: < 20 C for rice/maize cold-resistant varieties, else > 35 C shade
3. Fertilizer rate: < 100 kg/ha increase, else > 300 kg/ha reduce
4. Wheat above 30 C: adjust planting schedule
5. Rice below 1000 mm: SRI method
6. Predicted yield < 2 t/ha: soil testing
7. Area > 50 ha: precision agriculture

Only the first MAX_SUGGESTIONS matches are returned, in rule order.
"""
from typing import List
import logging

from cropadvisor.services.crop_reference_data import (
    CROP_MAIZE,
    CROP_RICE,
    CROP_WHEAT,
    normalize_crop_name,
)
from cropadvisor.services.prediction_models import OptimizationSuggestion, fertilizer_rate_kg_ha

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 4

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
PRIORITY_RANK = {PRIORITY_HIGH: 0, PRIORITY_MEDIUM: 1, PRIORITY_LOW: 2}


def format_number(value: float) -> str:
    """Render 600.0 as "600" and 612.5 as "612.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class OptimizationAdvisor:
    """Rule-based suggestions for improving yield on a field."""

    def _rainfall_rule(self, rainfall_mm: float) -> List[OptimizationSuggestion]:
        if rainfall_mm < 800:
            return [OptimizationSuggestion(
                title="Implement Drip Irrigation",
                description=(
                    f"Low rainfall detected ({format_number(rainfall_mm)}mm). Install drip irrigation "
                    "to improve water efficiency by 40-60% and boost yields."
                ),
                priority=PRIORITY_HIGH,
            )]
        if rainfall_mm > 2500:
            return [OptimizationSuggestion(
                title="Improve Drainage Systems",
                description=(
                    f"High rainfall ({format_number(rainfall_mm)}mm) detected. Install proper drainage "
                    "to prevent waterlogging and root diseases."
                ),
                priority=PRIORITY_HIGH,
            )]
        return []

    def _temperature_rule(self, crop: str, temperature_c: float) -> List[OptimizationSuggestion]:
        if temperature_c < 20 and crop in (CROP_RICE, CROP_MAIZE):
            return [OptimizationSuggestion(
                title="Consider Cold-Resistant Varieties",
                description=(
                    f"Temperature {format_number(temperature_c)}°C is below optimal. Switch to "
                    f"cold-resistant {crop.lower()} varieties for better yields."
                ),
                priority=PRIORITY_MEDIUM,
            )]
        if temperature_c > 35:
            return [OptimizationSuggestion(
                title="Apply Shade Nets & Mulching",
                description=(
                    f"High temperature ({format_number(temperature_c)}°C) can stress crops. Use shade "
                    "nets and mulching to reduce heat stress."
                ),
                priority=PRIORITY_HIGH,
            )]
        return []

    def _fertilizer_rule(self, rate_kg_ha: float) -> List[OptimizationSuggestion]:
        if rate_kg_ha < 100:
            return [OptimizationSuggestion(
                title="Increase Fertilizer Application",
                description=(
                    f"Current rate is {round(rate_kg_ha)} kg/ha. Increase to 150-200 kg/ha with soil "
                    "testing for optimal nutrient balance."
                ),
                priority=PRIORITY_HIGH,
            )]
        if rate_kg_ha > 300:
            return [OptimizationSuggestion(
                title="Reduce Fertilizer to Prevent Burning",
                description=(
                    f"Over-fertilization detected ({round(rate_kg_ha)} kg/ha). Reduce by 30% to "
                    "prevent nutrient burn and save costs."
                ),
                priority=PRIORITY_MEDIUM,
            )]
        return []

    def evaluate_rules(
        self,
        crop: str,
        area_hectares: float,
        rainfall_mm: float,
        temperature_c: float,
        fertilizer_amount_kg: float,
        predicted_yield: float,
    ) -> List[OptimizationSuggestion]:
        """All matching suggestions in rule order, without truncation."""
        rate_kg_ha = fertilizer_rate_kg_ha(fertilizer_amount_kg, area_hectares)
        crop = normalize_crop_name(crop)

        suggestions = []
        suggestions += self._rainfall_rule(rainfall_mm)
        suggestions += self._temperature_rule(crop, temperature_c)
        suggestions += self._fertilizer_rule(rate_kg_ha)

        if crop == CROP_WHEAT and temperature_c > 30:
            suggestions.append(OptimizationSuggestion(
                title="Adjust Wheat Planting Schedule",
                description=(
                    "High temperature affects wheat. Plant earlier (Oct-Nov) to avoid heat stress "
                    "during grain filling."
                ),
                priority=PRIORITY_MEDIUM,
            ))

        if crop == CROP_RICE and rainfall_mm < 1000:
            suggestions.append(OptimizationSuggestion(
                title="Switch to SRI Method",
                description=(
                    "System of Rice Intensification (SRI) reduces water needs by 25-30% while "
                    "maintaining or increasing yields."
                ),
                priority=PRIORITY_MEDIUM,
            ))

        if predicted_yield < 2:
            suggestions.append(OptimizationSuggestion(
                title="Conduct Comprehensive Soil Testing",
                description=(
                    "Low predicted yield indicates possible soil deficiencies. Test for NPK, "
                    "micronutrients, and pH levels."
                ),
                priority=PRIORITY_HIGH,
            ))

        if area_hectares > 50:
            suggestions.append(OptimizationSuggestion(
                title="Implement Precision Agriculture",
                description=(
                    f"With {format_number(area_hectares)} hectares, invest in GPS-guided equipment and "
                    "variable rate technology for optimized input application."
                ),
                priority=PRIORITY_LOW,
            ))

        return suggestions

    def advise(
        self,
        crop: str,
        area_hectares: float,
        rainfall_mm: float,
        temperature_c: float,
        fertilizer_amount_kg: float,
        predicted_yield: float,
        prioritize: bool = False,
    ) -> List[OptimizationSuggestion]:
        """
        Generate at most MAX_SUGGESTIONS suggestions.

        By default the cap keeps the earliest rules, so a late high-priority
        rule can be dropped. With prioritize=True matches are stable-sorted
        high > medium > low before the cap is applied.
        """
        suggestions = self.evaluate_rules(
            crop, area_hectares, rainfall_mm, temperature_c, fertilizer_amount_kg, predicted_yield
        )
        if prioritize:
            suggestions = sorted(suggestions, key=lambda s: PRIORITY_RANK.get(s.priority, len(PRIORITY_RANK)))

        if len(suggestions) > MAX_SUGGESTIONS:
            logger.debug(
                f"Dropping {len(suggestions) - MAX_SUGGESTIONS} suggestion(s): "
                f"{[s.title for s in suggestions[MAX_SUGGESTIONS:]]}"
            )
        return suggestions[:MAX_SUGGESTIONS]


# Singleton instance
optimization_advisor = OptimizationAdvisor()
