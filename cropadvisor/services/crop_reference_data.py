"""
Reference tables for crop yield prediction and fertilizer planning.

Constants shared by the planner, estimator and advisor. Tables are
read-only; lookups fall back to defaults instead of raising.
"""
from typing import Dict, List, Optional

CROP_RICE = "Rice"
CROP_WHEAT = "Wheat"
CROP_MAIZE = "Maize"
CROP_SUGARCANE = "Sugarcane"
CROP_COTTON = "Cotton(lint)"

SUPPORTED_CROPS = [CROP_RICE, CROP_WHEAT, CROP_MAIZE, CROP_SUGARCANE, CROP_COTTON]

CROP_ALIASES = {
    "rice": CROP_RICE,
    "wheat": CROP_WHEAT,
    "maize": CROP_MAIZE,
    "corn": CROP_MAIZE,
    "sugarcane": CROP_SUGARCANE,
    "cotton": CROP_COTTON,
    "cotton(lint)": CROP_COTTON,
    "cotton (lint)": CROP_COTTON,
}

# Base requirement per hectare (kg/ha)
BASE_NUTRIENT_REQUIREMENTS = {
    CROP_RICE: {"N": 120, "P": 60, "K": 40},
    CROP_WHEAT: {"N": 150, "P": 60, "K": 40},
    CROP_MAIZE: {"N": 140, "P": 70, "K": 50},
}
DEFAULT_NUTRIENT_REQUIREMENT = {"N": 100, "P": 50, "K": 40}

CROP_YIELD_MULTIPLIERS = {
    CROP_RICE: 1.2,
    CROP_WHEAT: 1.1,
    CROP_MAIZE: 1.0,
    CROP_SUGARCANE: 3.5,
    CROP_COTTON: 0.5,
}
DEFAULT_YIELD_MULTIPLIER = 1.0

FERTILIZER_TYPES = {
    "urea": {"label": "Urea (46-0-0)", "npk": "46-0-0", "N": 0.46, "P": 0.0, "K": 0.0},
    "dap": {"label": "DAP (18-46-0)", "npk": "18-46-0", "N": 0.18, "P": 0.46, "K": 0.0},
    "mop": {"label": "MOP (0-0-60)", "npk": "0-0-60", "N": 0.0, "P": 0.0, "K": 0.60},
    "npk": {"label": "NPK (19-19-19)", "npk": "19-19-19", "N": 0.19, "P": 0.19, "K": 0.19},
    "ssp": {"label": "SSP (0-16-0)", "npk": "0-16-0", "N": 0.0, "P": 0.16, "K": 0.0},
    # Compost composition depends on the source material
    "organic": {"label": "Organic Compost", "npk": "Variable", "N": None, "P": None, "K": None},
}

LOCATION_PRESETS = [
    {"name": "Hamirpur", "rainfall": 850, "avg_temp": 26, "soil_type": "Sandy Loam"},
    {"name": "Kanpur", "rainfall": 780, "avg_temp": 27, "soil_type": "Alluvial"},
    {"name": "Gorakhpur", "rainfall": 1200, "avg_temp": 26, "soil_type": "Clay Loam"},
    {"name": "Greater Noida", "rainfall": 720, "avg_temp": 25, "soil_type": "Alluvial"},
    {"name": "Lucknow", "rainfall": 900, "avg_temp": 26, "soil_type": "Sandy Clay"},
    {"name": "Jhansi", "rainfall": 680, "avg_temp": 28, "soil_type": "Red Sandy"},
]

CROP_IMAGES = {
    CROP_RICE: "assets/rice.jpg",
    CROP_WHEAT: "assets/wheat.jpg",
    CROP_MAIZE: "assets/maize.jpg",
    CROP_SUGARCANE: "assets/sugarcane.jpg",
    CROP_COTTON: "assets/cotton.jpg",
}


def normalize_crop_name(crop_name: Optional[str]) -> str:
    """
    Map a crop label to its canonical table key.

    Handles case differences and the short "Cotton" label used by forms.
    Unknown labels are returned stripped but otherwise untouched so that
    lookups fall back to the documented defaults.
    """
    if not crop_name:
        return ""
    normalized = crop_name.strip()
    return CROP_ALIASES.get(normalized.lower(), normalized)


def get_nutrient_requirement(crop_name: Optional[str]) -> Dict[str, int]:
    """Get the N, P, K baseline in kg/ha for a crop (default for unknown crops)."""
    crop = normalize_crop_name(crop_name)
    return dict(BASE_NUTRIENT_REQUIREMENTS.get(crop, DEFAULT_NUTRIENT_REQUIREMENT))


def get_yield_multiplier(crop_name: Optional[str]) -> float:
    return CROP_YIELD_MULTIPLIERS.get(normalize_crop_name(crop_name), DEFAULT_YIELD_MULTIPLIER)


def get_fertilizer_info(fertilizer_id: Optional[str]) -> Optional[Dict]:
    """Look up a fertilizer by id ("urea", "dap", ...). Returns None when unknown."""
    if not fertilizer_id:
        return None
    return FERTILIZER_TYPES.get(fertilizer_id.strip().lower())


def get_location_preset(name: Optional[str]) -> Optional[Dict]:
    if not name:
        return None
    key = name.strip().lower()
    for preset in LOCATION_PRESETS:
        if preset["name"].lower() == key:
            return dict(preset)
    return None


def get_crop_image(crop_name: Optional[str]) -> str:
    return CROP_IMAGES.get(normalize_crop_name(crop_name), "")


def get_available_crops() -> List[Dict]:
    """List supported crops with their multiplier, NPK baseline and image."""
    return [
        {
            "id": crop,
            "name": "Cotton" if crop == CROP_COTTON else crop,
            "yield_multiplier": CROP_YIELD_MULTIPLIERS[crop],
            "nutrient_requirement_kg_ha": get_nutrient_requirement(crop),
            "image": CROP_IMAGES[crop],
        }
        for crop in SUPPORTED_CROPS
    ]
