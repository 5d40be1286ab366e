"""WhatsApp Transport Layer - Module Exports"""

from .normalize import (
    extract_inbound,
    extract_text,
    normalize_phone,
    parse_message,
)
from .schemas import (
    ButtonMessage,
    InboundMessage,
    InteractiveMessage,
    NormalizedMessage,
    OtherMessage,
    TextMessage,
    WhatsAppWebhookPayload,
)
from .security import compute_signature, verify_signature, verify_webhook_challenge
from .webhook import process_inbound, router

__all__ = [
    # Schemas
    "NormalizedMessage",
    "WhatsAppWebhookPayload",
    "InboundMessage",
    "TextMessage",
    "ButtonMessage",
    "InteractiveMessage",
    "OtherMessage",
    # Normalization
    "extract_inbound",
    "extract_text",
    "normalize_phone",
    "parse_message",
    # Security
    "compute_signature",
    "verify_signature",
    "verify_webhook_challenge",
    # Router
    "process_inbound",
    "router",
]
