"""
Configuration for the Valuation Bot webhook
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _split_recipients(raw: str) -> list:
    """Split a comma-separated recipient list, dropping blanks."""
    return [part.strip() for part in raw.split(",") if part.strip()]


class Config:
    """Configuration class for the webhook and Twilio client"""

    # ===== Twilio Credentials =====

    TWILIO_ACCOUNT_SID: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN: str = os.getenv("TWILIO_AUTH_TOKEN", "")

    # WhatsApp sender, e.g. "whatsapp:+14155238886"
    TWILIO_WHATSAPP_FROM: str = os.getenv("TWILIO_WHATSAPP_FROM", "")

    # Comma-separated recipients for the "bot is online" message
    TWILIO_WHATSAPP_TO: str = os.getenv("TWILIO_WHATSAPP_TO", "")
    ANNOUNCE_RECIPIENTS: list = _split_recipients(TWILIO_WHATSAPP_TO)
    ANNOUNCE_ON_STARTUP: bool = os.getenv("ANNOUNCE_ON_STARTUP", "True").lower() == "true"

    # Used when an inbound payload carries no From field
    DEFAULT_SENDER: str = os.getenv("DEFAULT_SENDER", "whatsapp:+10000000000")

    # ===== Server =====

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))

    # Public URL Twilio is configured with (ngrok during development)
    PUBLIC_WEBHOOK_URL: str = os.getenv("PUBLIC_WEBHOOK_URL", "")

    # ===== Logging =====

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info").lower()
