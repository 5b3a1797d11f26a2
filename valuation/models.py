"""
Data models for the Valuation Bot
"""
from typing import NamedTuple, Optional
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


CUSTOM_PRESET = "custom"


# ============================================================================
# Pricing
# ============================================================================

class Preset(NamedTuple):
    """Named bundle of take percentage and exchange rate"""
    display_name: str
    percentage: float       # Fraction in (0, 1]
    exchange_rate: float    # Source currency units per 1 SGD


@dataclass
class UserPreference:
    """Per-user valuation settings"""
    user_id: str
    percentage: float
    exchange_rate: float
    active_preset: str = "default"          # Catalog key, or "custom"
    last_updated: Optional[datetime] = None  # UTC instant of last change


@dataclass(frozen=True)
class CalculationResult:
    """One priced item. Offer is kept at full precision."""
    price: float
    percentage: float
    exchange_rate: float
    offer: float


# ============================================================================
# Inbound webhook
# ============================================================================

class InboundMessage(BaseModel):
    """Twilio webhook fields we care about; everything else is ignored"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    body: Optional[str] = Field(default=None, alias="Body")
    sender: Optional[str] = Field(default=None, alias="From")
    to: Optional[str] = Field(default=None, alias="To")
    message_sid: Optional[str] = Field(default=None, alias="MessageSid")
    message_status: Optional[str] = Field(default=None, alias="MessageStatus")

    @property
    def is_status_callback(self) -> bool:
        return bool(self.message_status)

    @property
    def has_body(self) -> bool:
        return bool(self.body)


@dataclass
class InboundOutcome:
    """What the HTTP layer should do with an inbound payload"""
    status: str                      # "status_callback", "no_body" or "reply"
    reply: Optional[str] = None
    recipient: Optional[str] = None

    @property
    def should_send(self) -> bool:
        return self.status == "reply" and self.reply is not None
