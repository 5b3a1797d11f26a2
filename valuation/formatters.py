"""
Reply formatters for the Valuation Bot
Renders calculations, settings and help text as WhatsApp-flavoured strings
"""
from typing import List

from .models import CalculationResult, UserPreference, CUSTOM_PRESET
from .presets import PRESETS, DEFAULT_PERCENTAGE, DEFAULT_EXCHANGE_RATE


CURRENCY = "SGD"
TIMESTAMP_FORMAT = "%d %b %Y, %H:%M"


def format_number(value: float) -> str:
    """Show whole numbers without a trailing .0"""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_percentage(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


def format_offer(offer: float) -> str:
    return f"{CURRENCY} {offer:.2f}"


# ============================================================================
# Calculations
# ============================================================================

def render_calculation(price: float, percentage: float, rate: float, offer: float) -> str:
    """Four-line block for a single item"""
    return (
        f"Buff Price: {format_number(price)}\n"
        f"Percentage: {format_percentage(percentage)}\n"
        f"Exchange Rate: {format_number(rate)}\n"
        f"Offer: *{format_offer(offer)}*"
    )


def render_result(result: CalculationResult) -> str:
    return render_calculation(result.price, result.percentage, result.exchange_rate, result.offer)


def render_summary(results: List[CalculationResult]) -> str:
    """Count and all offers, for multi-item calculations"""
    offers = ", ".join(format_offer(r.offer) for r in results)
    return f"*Summary:* {len(results)} items\nOffers: {offers}"


def render_saved_settings_note(percentage: float, rate: float) -> str:
    return (
        f"_Using your saved settings: {format_percentage(percentage)} "
        f"@ {format_number(rate)}. Send /reset to go back to defaults._"
    )


def render_calculation_reply(
    results: List[CalculationResult],
    percentage: float,
    rate: float,
    show_saved_note: bool
) -> str:
    """Full /calculate reply: header, one block per item, summary and note"""
    sections = ["*Price Calculation*"]
    sections.extend(render_result(r) for r in results)
    if len(results) > 1:
        sections.append(render_summary(results))
    if show_saved_note:
        sections.append(render_saved_settings_note(percentage, rate))
    return "\n\n".join(sections)


# ============================================================================
# Settings
# ============================================================================

def _quick_actions() -> str:
    lines = ["*Quick Actions*"]
    for name, preset in PRESETS.items():
        lines.append(
            f"/settings {name} - {preset.display_name} "
            f"({format_percentage(preset.percentage)} @ {format_number(preset.exchange_rate)})"
        )
    lines.append("/set rate=5.45 p=92.5 - custom values")
    lines.append("/reset - restore defaults")
    return "\n".join(lines)


def render_settings_form(pref: UserPreference) -> str:
    """Current settings plus the quick-action menu"""
    lines = ["*Your Valuation Settings*", ""]

    if pref.active_preset != CUSTOM_PRESET:
        preset = PRESETS.get(pref.active_preset)
        name = preset.display_name if preset else pref.active_preset
        lines.append(f"Preset: {name}")

    lines.append(f"Percentage: {format_percentage(pref.percentage)}")
    lines.append(f"Exchange Rate: {format_number(pref.exchange_rate)}")

    if pref.last_updated is not None:
        updated = pref.last_updated.astimezone().strftime(TIMESTAMP_FORMAT)
    else:
        updated = "N/A"
    lines.append(f"Last Updated: {updated}")

    return "\n".join(lines) + "\n\n" + _quick_actions()


def render_preset_applied(pref: UserPreference) -> str:
    preset = PRESETS[pref.active_preset]
    return f"✅ Applied preset *{preset.display_name}*.\n\n" + render_settings_form(pref)


def render_unknown_preset(name: str) -> str:
    available = ", ".join(PRESETS)
    return f"⚠️ Unknown preset: {name}\nAvailable presets: {available}"


def render_settings_updated(pref: UserPreference) -> str:
    return "✅ Settings updated!\n\n" + render_settings_form(pref)


def render_reset_confirmation() -> str:
    return (
        "🔄 Settings reset to defaults: "
        f"{format_percentage(DEFAULT_PERCENTAGE)} @ {format_number(DEFAULT_EXCHANGE_RATE)}"
    )


# ============================================================================
# Fixed texts
# ============================================================================

def render_usage() -> str:
    return (
        "Please provide a price to calculate. Example:\n"
        "/calculate 15000\n"
        "/calculate rate=5.45 p=92.5 15000\n\n"
        "Send several prices on separate lines to price them together."
    )


def render_set_usage() -> str:
    return (
        "Please provide a valid rate and/or percentage. Example:\n"
        "/set rate=5.45 p=92.5\n\n"
        "rate must be above 0, p must be above 0 and at most 100."
    )


def render_help() -> str:
    presets = ", ".join(PRESETS)
    return (
        "*Valuation Bot Help*\n\n"
        "- For most items, I offer between 92% - 93.5% of the maximum price.\n\n"
        "*Calculate an offer*\n"
        "/calculate [Buff Price] - one or more prices, one per line\n"
        "/calculate rate=[rate] p=[percentage] [Buff Price] - values are saved for next time\n\n"
        "*Settings*\n"
        "/settings - view your current settings\n"
        f"/settings [preset] - apply a preset ({presets})\n"
        "/set rate=[rate] p=[percentage] - save custom values\n"
        f"/reset - restore {format_percentage(DEFAULT_PERCENTAGE)} @ {format_number(DEFAULT_EXCHANGE_RATE)}\n\n"
        "Examples:\n"
        "/calculate 15000 (uses your saved settings)\n"
        "/calculate rate=5.45 p=92.5 15000\n"
        "/settings high"
    )


def render_welcome() -> str:
    return (
        "Welcome to the Valuation Bot! Use /calculate [price] to get an offer, "
        "or /help for more information."
    )


def render_online_announcement() -> str:
    return "Valuation Bot is now online! Send /help for instructions."
