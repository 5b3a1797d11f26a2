"""
Preset catalog and global defaults
"""
from typing import Dict, Optional

from .models import Preset, CUSTOM_PRESET


DEFAULT_PERCENTAGE = 0.93       # 93%
DEFAULT_EXCHANGE_RATE = 5.43    # 1 SGD = 5.43

PERCENTAGE_TOLERANCE = 0.001
RATE_TOLERANCE = 0.01

DEFAULT_PRESET = "default"

# Order matters: the first preset within tolerance wins
PRESETS: Dict[str, Preset] = {
    "default": Preset("Default", DEFAULT_PERCENTAGE, DEFAULT_EXCHANGE_RATE),
    "high": Preset("High", 0.935, DEFAULT_EXCHANGE_RATE),
    "low": Preset("Low", 0.92, DEFAULT_EXCHANGE_RATE),
    "custom_rate_high": Preset("High Rate", DEFAULT_PERCENTAGE, 5.50),
    "custom_rate_low": Preset("Low Rate", DEFAULT_PERCENTAGE, 5.35),
}


def get_preset(name: str) -> Optional[Preset]:
    """Look up a preset by its exact catalog key"""
    return PRESETS.get(name)


def match_preset(percentage: float, exchange_rate: float) -> str:
    """Return the key of the preset matching these values, or "custom"."""
    for name, preset in PRESETS.items():
        if (abs(preset.percentage - percentage) < PERCENTAGE_TOLERANCE
                and abs(preset.exchange_rate - exchange_rate) < RATE_TOLERANCE):
            return name
    return CUSTOM_PRESET


def is_default(percentage: float, exchange_rate: float) -> bool:
    """True when the values are exactly the global defaults"""
    return percentage == DEFAULT_PERCENTAGE and exchange_rate == DEFAULT_EXCHANGE_RATE
