"""
Runtime configuration read from environment variables.
"""
import os
from typing import List, Optional

LOG_LEVEL = os.environ.get("CROPADVISOR_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.environ.get("CROPADVISOR_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


def get_yield_seed() -> Optional[int]:
    """Seed for the default yield noise source, or None for an unseeded generator."""
    raw = os.environ.get("CROPADVISOR_YIELD_SEED")
    if raw is None or raw.strip() == "":
        return None
    return int(raw)
