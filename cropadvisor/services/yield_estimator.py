"""
Yield Estimator Service.

Multiplicative factor model for crop yield (t/ha):

    yield = 1.5 x crop multiplier x rainfall x temperature x fertilizer rate x noise

Factors:
- Rainfall: 1.3 when 1000 < mm < 2000, 0.7 below 800 mm, otherwise 1.0
- Temperature: 1.2 when 20 < C < 30, 0.8 below 15 C or above 35 C, otherwise 1.0
- Fertilizer rate (kg/ha): 1.15 when 100 < rate < 250, 0.85 below 50, otherwise 1.0
- Noise: uniform in [0.9, 1.1) drawn from an injectable random source

The result never drops below 0.1 t/ha.
"""
from typing import Dict, Optional
import logging
import random

from cropadvisor.config import get_yield_seed
from cropadvisor.services.crop_reference_data import get_yield_multiplier, normalize_crop_name
from cropadvisor.services.prediction_models import fertilizer_rate_kg_ha

logger = logging.getLogger(__name__)

BASE_YIELD_T_HA = 1.5
MIN_YIELD_T_HA = 0.1
NOISE_LOW = 0.9
NOISE_SPAN = 0.2


def rainfall_factor(rainfall_mm: float) -> float:
    if 1000 < rainfall_mm < 2000:
        return 1.3
    if rainfall_mm < 800:
        return 0.7
    return 1.0


def temperature_factor(temperature_c: float) -> float:
    if 20 < temperature_c < 30:
        return 1.2
    if temperature_c < 15 or temperature_c > 35:
        return 0.8
    return 1.0


def fertilizer_rate_factor(rate_kg_ha: float) -> float:
    if 100 < rate_kg_ha < 250:
        return 1.15
    if rate_kg_ha < 50:
        return 0.85
    return 1.0


def default_random_source() -> random.Random:
    """Unseeded generator, or seeded when CROPADVISOR_YIELD_SEED is set."""
    return random.Random(get_yield_seed())


class YieldEstimator:
    """
    Yield estimation with an injectable noise source.

    `rng` is any object exposing `random() -> float in [0, 1)`, typically
    `random.Random(seed)`. Passing the same seeded source state and the same
    inputs always yields the same estimate.
    """

    def __init__(self, rng=None):
        self._rng = rng

    def _resolve_rng(self, rng=None):
        if rng is not None:
            return rng
        if self._rng is not None:
            return self._rng
        return default_random_source()

    def get_factors(
        self,
        crop: str,
        rainfall_mm: float,
        temperature_c: float,
        fertilizer_amount_kg: float,
        area_hectares: float,
    ) -> Dict[str, float]:
        """Deterministic factor breakdown (everything except noise)."""
        rate = fertilizer_rate_kg_ha(fertilizer_amount_kg, area_hectares)
        return {
            "base": BASE_YIELD_T_HA,
            "crop": get_yield_multiplier(crop),
            "rainfall": rainfall_factor(rainfall_mm),
            "temperature": temperature_factor(temperature_c),
            "fertilizer_rate": fertilizer_rate_factor(rate),
        }

    def estimate_raw(
        self,
        crop: str,
        rainfall_mm: float,
        temperature_c: float,
        fertilizer_amount_kg: float,
        area_hectares: float,
        rng=None,
    ) -> float:
        """Clamped estimate in t/ha before display rounding."""
        factors = self.get_factors(crop, rainfall_mm, temperature_c, fertilizer_amount_kg, area_hectares)

        value = 1.0
        for factor in factors.values():
            value *= factor

        noise = NOISE_LOW + self._resolve_rng(rng).random() * NOISE_SPAN
        predicted = max(MIN_YIELD_T_HA, value * noise)

        logger.debug(
            f"Yield factors for {normalize_crop_name(crop)}: {factors}, "
            f"noise={noise:.4f} -> {predicted:.4f} t/ha"
        )
        return predicted

    def estimate(
        self,
        crop: str,
        rainfall_mm: float,
        temperature_c: float,
        fertilizer_amount_kg: float,
        area_hectares: float,
        rng=None,
    ) -> float:
        """
        Predicted yield in t/ha rounded to one decimal place.

        Raises:
            InvalidAreaError: if area_hectares <= 0
        """
        return round(
            self.estimate_raw(crop, rainfall_mm, temperature_c, fertilizer_amount_kg, area_hectares, rng=rng),
            1
        )


# Singleton instance
yield_estimator = YieldEstimator()
