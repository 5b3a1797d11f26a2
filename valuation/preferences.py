"""
Preference Store for the Valuation Bot
Keeps each user's take percentage and exchange rate in memory
"""
import math
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .models import UserPreference
from .presets import (
    DEFAULT_PERCENTAGE,
    DEFAULT_EXCHANGE_RATE,
    DEFAULT_PRESET,
    get_preset,
    match_preset
)


def is_valid_rate(value: Optional[float]) -> bool:
    """Exchange rates must be finite and positive"""
    return value is not None and math.isfinite(value) and value > 0


def is_valid_percentage(value: Optional[float]) -> bool:
    """Percentages are given on a 0-100 scale: 0 < value <= 100"""
    return value is not None and math.isfinite(value) and 0 < value <= 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PreferenceStore:
    """
    Thread-safe in-memory store of UserPreference records.

    Records are created lazily with the global defaults and never evicted.
    Callers always receive copies; the only way to change a record is update().
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._lock = threading.Lock()
        self._records: Dict[str, UserPreference] = {}
        self._clock = clock or _utcnow

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._records

    def _get_or_create(self, user_id: str) -> UserPreference:
        """Caller must hold the lock"""
        record = self._records.get(user_id)
        if record is None:
            record = UserPreference(
                user_id=user_id,
                percentage=DEFAULT_PERCENTAGE,
                exchange_rate=DEFAULT_EXCHANGE_RATE,
                active_preset=DEFAULT_PRESET
            )
            self._records[user_id] = record
        return record

    def get(self, user_id: str) -> UserPreference:
        """Get a user's preferences, creating the default record on first use"""
        with self._lock:
            return replace(self._get_or_create(user_id))

    def update(
        self,
        user_id: str,
        new_rate: Optional[float] = None,
        new_percentage: Optional[float] = None,
        preset_name: Optional[str] = None
    ) -> UserPreference:
        """
        Update a user's preferences.

        Args:
            user_id: User identifier (sender address)
            new_rate: Exchange rate, applied when > 0
            new_percentage: Percentage on a 0-100 scale, applied when in (0, 100]
            preset_name: Catalog key; when known it overrides both values

        Returns:
            Copy of the record after the update
        """
        with self._lock:
            record = self._get_or_create(user_id)

            preset = get_preset(preset_name) if preset_name else None
            if preset is not None:
                record.percentage = preset.percentage
                record.exchange_rate = preset.exchange_rate
                record.active_preset = preset_name
                record.last_updated = self._clock()
                return replace(record)

            changed = False
            if is_valid_rate(new_rate):
                record.exchange_rate = new_rate
                changed = True
            if is_valid_percentage(new_percentage):
                record.percentage = new_percentage / 100
                changed = True

            if changed:
                record.active_preset = match_preset(record.percentage, record.exchange_rate)
                record.last_updated = self._clock()

            return replace(record)

    def reset(self, user_id: str) -> UserPreference:
        """Restore the default preset"""
        return self.update(user_id, preset_name=DEFAULT_PRESET)
