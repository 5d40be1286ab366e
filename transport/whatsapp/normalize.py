"""
WhatsApp Input Normalization

PURE CONVERSION - NO I/O, NO SIDE EFFECTS

Converts a WhatsApp webhook payload into the NormalizedMessage that
Camunda consumes.
- TEXT: text.body
- BUTTON: button.text, then button.payload
- INTERACTIVE: first non-empty reply title/id
- ANYTHING ELSE: "[<type> received]" placeholder

Status updates (delivered/read) carry no message and yield None.
"""

import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from .schemas import (
    ButtonMessage,
    InboundMessage,
    InteractiveMessage,
    NormalizedMessage,
    TextMessage,
    WhatsAppWebhookPayload,
)

logger = logging.getLogger(__name__)

_message_adapter: TypeAdapter = TypeAdapter(InboundMessage)


def parse_message(raw: dict) -> InboundMessage:
    """
    Decode one raw WhatsApp message object into its typed variant.

    Raises:
        ValidationError: The object does not match the message schema
    """
    return _message_adapter.validate_python(raw)


def extract_inbound(
    payload: Any,
) -> Optional[NormalizedMessage]:
    """
    Convert a WhatsApp webhook payload into a NormalizedMessage.

    Only entry[0].changes[0].value.messages[0] is considered.

    Args:
        payload: Parsed JSON body (dict) or a WhatsAppWebhookPayload

    Returns:
        NormalizedMessage, or None when the payload carries no message
    """

    try:
        if not isinstance(payload, WhatsAppWebhookPayload):
            payload = WhatsAppWebhookPayload.model_validate(payload)

        value = payload.entry[0].changes[0].value
        if value is None or not value.messages:
            return None

        message = parse_message(value.messages[0])

    except (IndexError, ValidationError) as e:
        logger.debug(f"No message extracted from payload: {e}")
        return None

    return NormalizedMessage(
        phone=normalize_phone(message.from_),
        text=extract_text(message),
        waMessageId=message.id,
        timestamp=message.timestamp,
    )


def normalize_phone(sender: Optional[str]) -> str:
    """WhatsApp sends the number without '+'; add it when missing."""
    sender = sender or ""
    if sender.startswith("+"):
        return sender
    return f"+{sender}"


def extract_text(message: InboundMessage) -> str:
    """Best-effort text for a message, by type."""

    if isinstance(message, TextMessage):
        if message.text is None or message.text.body is None:
            return ""
        return message.text.body

    if isinstance(message, ButtonMessage):
        button = message.button
        if button is None:
            return ""
        if button.text is not None:
            return button.text
        if button.payload is not None:
            return button.payload
        return ""

    if isinstance(message, InteractiveMessage):
        return _interactive_text(message)

    return f"[{message.type or 'unknown'} received]"


def _interactive_text(message: InteractiveMessage) -> str:
    interactive = message.interactive
    if interactive is None:
        return ""

    candidates = []
    for reply in (interactive.button_reply, interactive.list_reply):
        if reply is not None:
            candidates.extend([reply.title, reply.id])

    for candidate in candidates:
        if candidate:
            return candidate
    return ""
