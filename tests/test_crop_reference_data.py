"""
Tests for the crop reference tables and lookups.
"""
import pytest
from cropadvisor.services.crop_reference_data import (
    FERTILIZER_TYPES,
    LOCATION_PRESETS,
    SUPPORTED_CROPS,
    get_available_crops,
    get_crop_image,
    get_fertilizer_info,
    get_location_preset,
    get_nutrient_requirement,
    get_yield_multiplier,
    normalize_crop_name,
)


class TestCropLookups:

    @pytest.mark.parametrize("label,expected", [
        ("Rice", "Rice"),
        ("rice", "Rice"),
        (" Wheat ", "Wheat"),
        ("Cotton", "Cotton(lint)"),
        ("Cotton(lint)", "Cotton(lint)"),
        ("Barley", "Barley"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize_crop_name(self, label, expected):
        assert normalize_crop_name(label) == expected

    @pytest.mark.parametrize("crop,expected", [
        ("Rice", 1.2), ("Wheat", 1.1), ("Maize", 1.0), ("Sugarcane", 3.5), ("Cotton", 0.5), ("Barley", 1.0),
    ])
    def test_yield_multiplier(self, crop, expected):
        assert get_yield_multiplier(crop) == expected

    def test_nutrient_requirement(self):
        assert get_nutrient_requirement("Wheat") == {"N": 150, "P": 60, "K": 40}
        assert get_nutrient_requirement("Cotton(lint)") == {"N": 100, "P": 50, "K": 40}

    def test_nutrient_requirement_is_a_copy(self):
        requirement = get_nutrient_requirement("Rice")
        requirement["N"] = 0
        assert get_nutrient_requirement("Rice")["N"] == 120

    def test_crop_images(self):
        assert get_crop_image("Cotton") == "assets/cotton.jpg"
        assert get_crop_image("Barley") == ""

    def test_available_crops(self):
        crops = get_available_crops()

        assert [c["id"] for c in crops] == SUPPORTED_CROPS
        cotton = crops[-1]
        assert cotton["name"] == "Cotton"
        assert cotton["yield_multiplier"] == 0.5


class TestFertilizerAndLocationLookups:

    def test_fertilizer_ids(self):
        assert set(FERTILIZER_TYPES) == {"urea", "dap", "mop", "npk", "ssp", "organic"}

    def test_fertilizer_info(self):
        assert get_fertilizer_info("DAP")["label"] == "DAP (18-46-0)"
        assert get_fertilizer_info("potash") is None
        assert get_fertilizer_info(None) is None

    def test_location_presets(self):
        assert len(LOCATION_PRESETS) == 6
        kanpur = get_location_preset("kanpur")
        assert kanpur == {"name": "Kanpur", "rainfall": 780, "avg_temp": 27, "soil_type": "Alluvial"}
        assert get_location_preset("Greater Noida")["rainfall"] == 720
        assert get_location_preset("Atlantis") is None
