"""
Inbound webhook routing
Filters out delivery-status callbacks and bodyless payloads before dispatch
"""
from typing import Any, Mapping

from pydantic import ValidationError

from .commands import CommandDispatcher
from .models import InboundMessage, InboundOutcome


def parse_inbound(payload: Mapping[str, Any]) -> InboundMessage:
    """
    Validate a webhook payload.

    Anything that does not fit the model (non-string fields, a non-mapping
    body) is treated as an empty payload.
    """
    try:
        return InboundMessage.model_validate(dict(payload or {}))
    except (ValidationError, TypeError, ValueError) as e:
        print(f"⚠️ Could not parse inbound payload: {e}")
        return InboundMessage()


def process_inbound(
    payload: Mapping[str, Any],
    dispatcher: CommandDispatcher,
    default_sender: str
) -> InboundOutcome:
    """
    Route one webhook payload.

    Returns:
        InboundOutcome; only outcomes with status "reply" should be sent
    """
    message = parse_inbound(payload)

    if message.is_status_callback:
        print(f"📬 Message {message.message_sid} status: {message.message_status}")
        return InboundOutcome(status="status_callback")

    if not message.has_body:
        print(f"⚠️ Received request without message body: {payload}")
        return InboundOutcome(status="no_body")

    sender = message.sender or default_sender
    text = message.body.strip()
    print(f"📩 Received message from {sender}: {text}")

    reply = dispatcher.handle(sender, text)
    return InboundOutcome(status="reply", reply=reply, recipient=sender)
