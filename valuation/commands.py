"""
Command parsing and dispatch for the Valuation Bot

Messages are tokenized once into typed tokens (key=value pairs, positive
numbers, everything else) and the token lists are read twice by /calculate:
first for rate=/p= overrides, then for prices.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from .formatters import (
    render_calculation_reply,
    render_help,
    render_preset_applied,
    render_reset_confirmation,
    render_set_usage,
    render_settings_form,
    render_settings_updated,
    render_unknown_preset,
    render_usage,
    render_welcome
)
from .preferences import PreferenceStore, is_valid_percentage, is_valid_rate
from .presets import PRESETS, is_default
from .pricing import build_result


class CommandType(Enum):
    """Recognised commands"""
    CALCULATE = "calculate"
    SETTINGS = "settings"
    RESET = "reset"
    SET = "set"
    HELP = "help"
    UNKNOWN = "unknown"


# Checked in order; /settings must come before /set
COMMAND_PREFIXES: List[Tuple[str, CommandType]] = [
    ("/calculate", CommandType.CALCULATE),
    ("/settings", CommandType.SETTINGS),
    ("/reset", CommandType.RESET),
    ("/set", CommandType.SET),
    ("/help", CommandType.HELP),
]

RATE_KEY = "rate"
PERCENTAGE_KEY = "p"


# ============================================================================
# Tokens
# ============================================================================

@dataclass(frozen=True)
class KeyValueToken:
    text: str
    key: str                 # Lower-cased
    value: Optional[float]   # None when the value is not a finite number


@dataclass(frozen=True)
class NumberToken:
    text: str
    value: float             # Finite and > 0


@dataclass(frozen=True)
class UnparsedToken:
    text: str


Token = Union[KeyValueToken, NumberToken, UnparsedToken]


def parse_number(text: str) -> Optional[float]:
    """Parse a finite float, or None. Digit separators like 1_000 are rejected."""
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def tokenize_line(line: str) -> List[Token]:
    """Split one line on whitespace into typed tokens"""
    tokens: List[Token] = []
    for part in line.split():
        if "=" in part:
            key, _, raw_value = part.partition("=")
            tokens.append(KeyValueToken(part, key.lower(), parse_number(raw_value)))
            continue

        number = parse_number(part)
        if number is not None and number > 0:
            tokens.append(NumberToken(part, number))
        else:
            tokens.append(UnparsedToken(part))
    return tokens


@dataclass
class ParsedMessage:
    """A message split into its command and per-line tokens"""
    command: CommandType
    text: str
    lines: List[List[Token]] = field(default_factory=list)

    @property
    def first_line(self) -> List[Token]:
        return self.lines[0] if self.lines else []

    @property
    def all_tokens(self) -> List[Token]:
        return [token for line in self.lines for token in line]

    @property
    def argument(self) -> Optional[str]:
        """First token after the command word, if any"""
        if len(self.first_line) < 2:
            return None
        return self.first_line[1].text

    @property
    def prices(self) -> List[float]:
        return [t.value for t in self.all_tokens if isinstance(t, NumberToken)]


def detect_command(text: str) -> CommandType:
    """Case-insensitive prefix match against the known commands"""
    lowered = text.lower()
    for prefix, command in COMMAND_PREFIXES:
        if lowered.startswith(prefix):
            return command
    return CommandType.UNKNOWN


def parse_message(text: str) -> ParsedMessage:
    stripped = text.strip()
    return ParsedMessage(
        command=detect_command(stripped),
        text=stripped,
        lines=[tokenize_line(line) for line in stripped.splitlines()]
    )


def extract_parameters(tokens: List[Token]) -> Tuple[Optional[float], Optional[float]]:
    """
    Pick the valid rate= and p= values out of a token list.

    Returns:
        (rate, percentage) with percentage on the 0-100 scale; invalid or
        missing values are None. The last valid occurrence wins.
    """
    rate = None
    percentage = None
    for token in tokens:
        if not isinstance(token, KeyValueToken):
            continue
        if token.key == RATE_KEY and is_valid_rate(token.value):
            rate = token.value
        elif token.key == PERCENTAGE_KEY and is_valid_percentage(token.value):
            percentage = token.value
    return rate, percentage


# ============================================================================
# Dispatcher
# ============================================================================

class CommandDispatcher:
    """Turns one inbound text into one reply, reading and writing the store"""

    def __init__(self, store: PreferenceStore):
        self.store = store
        self._handlers: Dict[CommandType, Callable[[str, ParsedMessage], str]] = {
            CommandType.CALCULATE: self._handle_calculate,
            CommandType.SETTINGS: self._handle_settings,
            CommandType.RESET: self._handle_reset,
            CommandType.SET: self._handle_set,
            CommandType.HELP: self._handle_help,
            CommandType.UNKNOWN: self._handle_unknown,
        }

    def handle(self, user_id: str, text: str) -> str:
        parsed = parse_message(text)
        return self._handlers[parsed.command](user_id, parsed)

    def _handle_calculate(self, user_id: str, parsed: ParsedMessage) -> str:
        rate, percentage = extract_parameters(parsed.first_line)
        if rate is not None or percentage is not None:
            pref = self.store.update(user_id, new_rate=rate, new_percentage=percentage)
            print(f"💾 Saved calculation settings for {user_id}: "
                  f"{pref.percentage} @ {pref.exchange_rate}")
        else:
            pref = self.store.get(user_id)

        prices = parsed.prices
        if not prices:
            return render_usage()

        results = [build_result(price, pref.percentage, pref.exchange_rate) for price in prices]
        return render_calculation_reply(
            results,
            pref.percentage,
            pref.exchange_rate,
            show_saved_note=not is_default(pref.percentage, pref.exchange_rate)
        )

    def _handle_settings(self, user_id: str, parsed: ParsedMessage) -> str:
        name = parsed.argument
        if name is None:
            return render_settings_form(self.store.get(user_id))

        if name in PRESETS:
            pref = self.store.update(user_id, preset_name=name)
            print(f"🎛️ Applied preset '{name}' for {user_id}")
            return render_preset_applied(pref)

        return render_unknown_preset(name) + "\n\n" + render_settings_form(self.store.get(user_id))

    def _handle_reset(self, user_id: str, parsed: ParsedMessage) -> str:
        self.store.reset(user_id)
        print(f"🔄 Reset settings for {user_id}")
        return render_reset_confirmation()

    def _handle_set(self, user_id: str, parsed: ParsedMessage) -> str:
        rate, percentage = extract_parameters(parsed.all_tokens)
        if rate is None and percentage is None:
            return render_set_usage()

        pref = self.store.update(user_id, new_rate=rate, new_percentage=percentage)
        return render_settings_updated(pref)

    def _handle_help(self, user_id: str, parsed: ParsedMessage) -> str:
        return render_help()

    def _handle_unknown(self, user_id: str, parsed: ParsedMessage) -> str:
        return render_welcome()
