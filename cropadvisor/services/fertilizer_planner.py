"""
Fertilizer Planner Service.

Builds the fertilizer dosage table for a field from the crop's N-P-K
baseline:
- Selected primary fertilizer covers 40% of the nitrogen baseline
- DAP (46% P) covers the phosphorus baseline
- MOP (60% K) covers the potassium baseline
- Urea (46% N) covers the remaining 60% of nitrogen
- Zinc Sulphate at a flat 25 kg/ha

Entries are always returned in that order; amounts are totals for the
whole area, rounded to whole kilograms.
"""
from typing import List
import logging

from cropadvisor.services.crop_reference_data import (
    FERTILIZER_TYPES,
    get_fertilizer_info,
    get_nutrient_requirement,
    normalize_crop_name,
)
from cropadvisor.services.prediction_models import (
    FertilizerRecommendation,
    require_finite,
    require_positive_area,
)

logger = logging.getLogger(__name__)


class FertilizerPlanner:
    """Deterministic fertilizer dosing for a crop and cultivated area."""

    PRIMARY_N_SHARE = 0.4
    COMPLEMENT_N_SHARE = 0.6
    DAP_P_FRACTION = 0.46
    MOP_K_FRACTION = 0.60
    UREA_N_FRACTION = 0.46
    ZINC_SULPHATE_KG_HA = 25

    def _kg(self, amount: float) -> int:
        return round(require_finite(amount, "Fertilizer amount"))

    def plan(
        self,
        crop: str,
        area_hectares: float,
        selected_fertilizer: str
    ) -> List[FertilizerRecommendation]:
        """
        Compute the dosage table.

        Args:
            crop: Crop label (unknown crops use the default baseline)
            area_hectares: Cultivated area, must be > 0
            selected_fertilizer: Fertilizer id chosen as primary source

        Returns:
            5 recommendations, or 4 when the selected fertilizer is unknown.
        """
        require_positive_area(area_hectares)

        baseline = get_nutrient_requirement(crop)
        base_n, base_p, base_k = baseline["N"], baseline["P"], baseline["K"]

        recommendations = []

        selected = get_fertilizer_info(selected_fertilizer)
        if selected:
            recommendations.append(FertilizerRecommendation(
                name=selected["label"],
                amount_kg=self._kg(base_n * self.PRIMARY_N_SHARE * area_hectares),
                purpose="Primary nutrient source (selected)",
            ))
        else:
            logger.debug(f"Unknown fertilizer '{selected_fertilizer}', primary entry omitted")

        recommendations.extend([
            FertilizerRecommendation(
                name=FERTILIZER_TYPES["dap"]["label"],
                amount_kg=self._kg(base_p / self.DAP_P_FRACTION * area_hectares),
                purpose="Phosphorus for root development",
            ),
            FertilizerRecommendation(
                name=FERTILIZER_TYPES["mop"]["label"],
                amount_kg=self._kg(base_k / self.MOP_K_FRACTION * area_hectares),
                purpose="Potassium for disease resistance",
            ),
            FertilizerRecommendation(
                name=FERTILIZER_TYPES["urea"]["label"],
                amount_kg=self._kg(base_n * self.COMPLEMENT_N_SHARE / self.UREA_N_FRACTION * area_hectares),
                purpose="Nitrogen for vegetative growth",
            ),
            FertilizerRecommendation(
                name="Zinc Sulphate",
                amount_kg=self._kg(self.ZINC_SULPHATE_KG_HA * area_hectares),
                purpose="Micronutrient supplementation",
            ),
        ])

        logger.debug(
            f"Fertilizer plan for {normalize_crop_name(crop)} on {area_hectares} ha: "
            f"{[(r.name, r.amount_kg) for r in recommendations]}"
        )
        return recommendations


# Singleton instance
fertilizer_planner = FertilizerPlanner()
