"""
Tests for the Fertilizer Planner.

Each scenario verifies:
1. Entry order is fixed (primary, DAP, MOP, Urea, Zinc Sulphate)
2. Amounts follow the crop N-P-K baseline and scale with area
3. Unknown fertilizer ids drop the primary entry, unknown crops use defaults
"""
import pytest
from cropadvisor.services.fertilizer_planner import FertilizerPlanner
from cropadvisor.services.prediction_models import InvalidAreaError, InvalidQuantityError

planner = FertilizerPlanner()


def amounts(plan):
    return [rec.amount_kg for rec in plan]


def names(plan):
    return [rec.name for rec in plan]


class TestPlanAmounts:
    """Dosage math per crop."""

    def test_rice_with_urea_primary(self):
        """Rice, 10 ha, urea -> primary 480 kg (0.4 x 120 x 10)."""
        plan = planner.plan("Rice", 10, "urea")

        assert names(plan) == [
            "Urea (46-0-0)",
            "DAP (18-46-0)",
            "MOP (0-0-60)",
            "Urea (46-0-0)",
            "Zinc Sulphate",
        ]
        assert amounts(plan) == [480, 1304, 667, 1565, 250]

    def test_wheat_with_dap_primary(self):
        plan = planner.plan("Wheat", 2, "dap")

        assert plan[0].name == "DAP (18-46-0)"
        assert amounts(plan) == [120, 261, 133, 391, 50]

    def test_maize_with_npk_primary(self):
        plan = planner.plan("Maize", 3, "npk")

        assert plan[0].name == "NPK (19-19-19)"
        assert amounts(plan) == [168, 457, 250, 548, 75]

    def test_sugarcane_uses_default_baseline(self):
        """Crops without a dedicated baseline use N=100, P=50, K=40."""
        plan = planner.plan("Sugarcane", 1, "ssp")

        assert plan[0].name == "SSP (0-16-0)"
        assert amounts(plan) == [40, 109, 67, 130, 25]

    def test_purposes_and_units(self):
        plan = planner.plan("Rice", 1, "organic")

        assert plan[0].name == "Organic Compost"
        assert [rec.purpose for rec in plan] == [
            "Primary nutrient source (selected)",
            "Phosphorus for root development",
            "Potassium for disease resistance",
            "Nitrogen for vegetative growth",
            "Micronutrient supplementation",
        ]
        assert all(rec.unit == "kg" for rec in plan)
        assert all(isinstance(rec.amount_kg, int) and rec.amount_kg >= 0 for rec in plan)


class TestFallbacks:
    """Unknown identifiers fall back instead of failing."""

    def test_unknown_fertilizer_omits_primary(self):
        plan = planner.plan("Rice", 10, "potash-special")

        assert len(plan) == 4
        assert names(plan) == ["DAP (18-46-0)", "MOP (0-0-60)", "Urea (46-0-0)", "Zinc Sulphate"]

    def test_unknown_crop_and_fertilizer(self):
        plan = planner.plan("Barley", 1, "unknown")

        assert amounts(plan) == [109, 67, 130, 25]

    def test_fertilizer_id_is_case_insensitive(self):
        assert planner.plan("Rice", 10, "UREA")[0].amount_kg == 480

    @pytest.mark.parametrize("fertilizer", ["urea", "dap", "mop", "npk", "ssp", "organic"])
    def test_known_fertilizers_give_five_entries(self, fertilizer):
        assert len(planner.plan("Maize", 4, fertilizer)) == 5


class TestDeterminism:

    def test_identical_inputs_identical_plan(self):
        first = planner.plan("Wheat", 7.5, "mop")
        second = planner.plan("Wheat", 7.5, "mop")

        assert first == second

    @pytest.mark.parametrize("area", [0, -1, -0.5])
    def test_non_positive_area_rejected(self, area):
        with pytest.raises(InvalidAreaError):
            planner.plan("Rice", area, "urea")

    @pytest.mark.parametrize("area", [float("inf"), float("nan")])
    def test_non_finite_area_rejected(self, area):
        with pytest.raises(InvalidAreaError):
            planner.plan("Rice", area, "urea")

    def test_dose_overflow_rejected(self):
        """A finite area whose doses overflow to inf is an input error, not a crash."""
        with pytest.raises(InvalidQuantityError):
            planner.plan("Wheat", 1e308, "urea")
