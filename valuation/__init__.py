"""
Valuation Bot core
Parses chat commands, keeps per-user pricing preferences and computes offers
"""

from .commands import CommandDispatcher, CommandType, parse_message
from .inbound import process_inbound
from .models import (
    CalculationResult,
    InboundMessage,
    InboundOutcome,
    Preset,
    UserPreference
)
from .preferences import PreferenceStore
from .presets import PRESETS, DEFAULT_PERCENTAGE, DEFAULT_EXCHANGE_RATE
from .pricing import calculate_offer

__version__ = "1.0.0"

__all__ = [
    "CommandDispatcher",
    "CommandType",
    "parse_message",
    "process_inbound",
    "CalculationResult",
    "InboundMessage",
    "InboundOutcome",
    "Preset",
    "UserPreference",
    "PreferenceStore",
    "PRESETS",
    "DEFAULT_PERCENTAGE",
    "DEFAULT_EXCHANGE_RATE",
    "calculate_offer"
]
