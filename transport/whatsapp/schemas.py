"""
WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the inbound WhatsApp webhook contract and the normalized record
forwarded to Camunda.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


# ============================================================================
# NORMALIZED MESSAGE (THE CONTRACT WITH CAMUNDA)
# ============================================================================

class NormalizedMessage(BaseModel):
    """
    Small fixed-shape record sent to the Camunda webhook start event.

    Serializes to exactly: phone, text, waMessageId, timestamp.
    """

    model_config = ConfigDict(frozen=True)  # Immutable once built

    phone: str = Field(..., description="Sender number, always '+' prefixed")
    text: str = Field(..., description="Best-effort text, placeholder for unsupported types")
    waMessageId: Optional[str] = Field(None, description="WhatsApp message ID, unmodified")
    timestamp: Optional[Union[str, int, float]] = Field(
        None,
        description="WhatsApp timestamp, passed through unmodified"
    )


# ============================================================================
# WHATSAPP MESSAGE VARIANTS (INPUT)
# ============================================================================

class _MessageBase(BaseModel):
    """Fields common to every WhatsApp message object."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    from_: Optional[str] = Field(None, alias="from")
    id: Optional[str] = None
    timestamp: Optional[Union[str, int, float]] = None
    type: Optional[str] = None


class TextBody(BaseModel):
    body: Optional[str] = None


class ButtonBody(BaseModel):
    """Quick-reply button press on a template message."""
    text: Optional[str] = None
    payload: Optional[str] = None


class Reply(BaseModel):
    """button_reply / list_reply object."""
    id: Optional[str] = None
    title: Optional[str] = None


class InteractiveBody(BaseModel):
    button_reply: Optional[Reply] = None
    list_reply: Optional[Reply] = None


class TextMessage(_MessageBase):
    """Plain text message."""
    type: Literal["text"]
    text: Optional[TextBody] = None


class ButtonMessage(_MessageBase):
    """Template quick-reply button message."""
    type: Literal["button"]
    button: Optional[ButtonBody] = None


class InteractiveMessage(_MessageBase):
    """Interactive reply (reply button or list row)."""
    type: Literal["interactive"]
    interactive: Optional[InteractiveBody] = None


class OtherMessage(_MessageBase):
    """Any message type the relay does not extract text from."""
    pass


def _message_tag(value) -> str:
    message_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if message_type in ("text", "button", "interactive"):
        return message_type
    return "other"


InboundMessage = Annotated[
    Union[
        Annotated[TextMessage, Tag("text")],
        Annotated[ButtonMessage, Tag("button")],
        Annotated[InteractiveMessage, Tag("interactive")],
        Annotated[OtherMessage, Tag("other")],
    ],
    Discriminator(_message_tag),
]


# ============================================================================
# WHATSAPP WEBHOOK PAYLOAD SCHEMAS (INPUT)
# ============================================================================

class ChangeValue(BaseModel):
    """value object of a change; statuses-only updates carry no messages."""

    model_config = ConfigDict(extra="allow")

    messages: list[dict] = Field(default_factory=list)


class Change(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: Optional[ChangeValue] = None


class Entry(BaseModel):
    model_config = ConfigDict(extra="allow")

    changes: list[Change] = Field(default_factory=list)


class WhatsAppWebhookPayload(BaseModel):
    """
    Full WhatsApp webhook payload.

    ref: https://developers.facebook.com/docs/whatsapp/cloud-api/webhooks/payload-example
    """

    model_config = ConfigDict(extra="allow")  # WhatsApp may add fields

    object: Optional[str] = Field(None, description="Usually 'whatsapp_business_account'")
    entry: list[Entry] = Field(default_factory=list, description="Webhook entries")
