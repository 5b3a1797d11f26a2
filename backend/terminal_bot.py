# terminal_bot.py
"""
Terminal-based WhatsApp Bot Simulator
Takes input from terminal instead of the Twilio webhook, prints replies instead of sending them.
"""
from typing import Any, Dict, Optional

from config.config import Config
from valuation.commands import CommandDispatcher
from valuation.inbound import process_inbound
from valuation.preferences import PreferenceStore

# Track last used phone between prompts
_last_phone: Optional[str] = None


# ========================= Terminal Output Functions =========================

def send_text_message(to_number: str, message: str):
    """Print a text message to terminal (simulates a WhatsApp send)."""
    print(f"\n{'='*60}")
    print(f"[TEXT -> {to_number}]")
    print("-" * 60)
    print(message)
    print("=" * 60)


# ========================= Terminal Input Functions =========================

def get_terminal_input() -> Dict[str, Any]:
    """
    Get message input from terminal.

    Returns dict with:
        - From: Sender address
        - Body: Message text (may span lines, finish with an empty line)
    or {"quit": True}
    """
    global _last_phone

    print("\n" + "=" * 60)
    print("Enter message details (or 'quit' to exit):")
    print("-" * 60)

    default_phone = _last_phone or Config.DEFAULT_SENDER
    phone_input = input(f"From [{default_phone}]: ").strip()
    if phone_input.lower() == "quit":
        return {"quit": True}
    phone = phone_input if phone_input else default_phone
    _last_phone = phone

    print("Message (finish with an empty line):")
    lines = []
    while True:
        line = input()
        if not line.strip():
            break
        if not lines and line.strip().lower() == "quit":
            return {"quit": True}
        lines.append(line)

    return {"From": phone, "Body": "\n".join(lines)}


# ========================= Main Loop =========================

def main():
    """Main terminal bot loop."""
    print("\n" + "=" * 60)
    print("  TERMINAL BOT - Valuation Bot Simulator")
    print("=" * 60)
    print("Preferences are kept in memory for this session only.")
    print("\nType 'quit' at any prompt to exit.")
    print("Press Ctrl+C to force quit.\n")

    dispatcher = CommandDispatcher(PreferenceStore())

    try:
        while True:
            input_data = get_terminal_input()

            if input_data.get("quit"):
                print("\nGoodbye!")
                break

            outcome = process_inbound(input_data, dispatcher, Config.DEFAULT_SENDER)
            if outcome.should_send:
                send_text_message(outcome.recipient, outcome.reply)
            else:
                print(f"[INFO] Nothing to send ({outcome.status})")

    except (KeyboardInterrupt, EOFError):
        print("\n\n[INFO] Interrupted by user. Goodbye!")


if __name__ == "__main__":
    main()
