"""
WhatsApp Webhook Receiver

FastAPI router that verifies Meta webhooks and relays messages to Camunda.
ACK first, forward later: the forward runs as a background task after the
200 has been sent, so Camunda latency never counts against Meta's timeout.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Query, Request, Response, status
from fastapi.responses import PlainTextResponse

from config import RelayConfig
from transport.camunda.forwarder import CamundaForwarder

from .normalize import extract_inbound
from .security import SIGNATURE_HEADER, verify_signature, verify_webhook_challenge

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wa", tags=["WhatsApp Transport"])


def get_relay_config(request: Request) -> RelayConfig:
    """Configuration built once at startup (see main.create_app)."""
    return request.app.state.config


def get_forwarder(request: Request) -> CamundaForwarder:
    return request.app.state.forwarder


# ============================================================================
# WEBHOOK CHALLENGE (Setup only)
# ============================================================================

@router.get("/webhook")
async def whatsapp_webhook_challenge(
    hub_mode: Optional[str] = Query(None, alias="hub.mode"),
    hub_verify_token: Optional[str] = Query(None, alias="hub.verify_token"),
    hub_challenge: Optional[str] = Query(None, alias="hub.challenge"),
    config: RelayConfig = Depends(get_relay_config),
) -> Response:
    """
    Verify webhook subscription challenge from Meta.

    Called when "Verify & Save" is clicked in the WhatsApp configuration.

    Returns:
        200 with hub.challenge as plain text if valid
        403 with empty body otherwise
    """

    challenge = verify_webhook_challenge(
        hub_mode, hub_verify_token, hub_challenge, config.verify_token
    )

    if challenge is None:
        logger.warning("Meta webhook verification failed.")
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    logger.info("Meta webhook verified.")
    return PlainTextResponse(challenge, status_code=status.HTTP_200_OK)


# ============================================================================
# WEBHOOK RECEIVER (Inbound delivery)
# ============================================================================

@router.post("/webhook")
async def whatsapp_webhook_receiver(
    request: Request,
    background_tasks: BackgroundTasks,
    x_hub_signature_256: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    config: RelayConfig = Depends(get_relay_config),
    forwarder: CamundaForwarder = Depends(get_forwarder),
) -> Response:
    """
    Receive WhatsApp deliveries via webhook.

    Flow:
    1. Read raw body
    2. Verify signature over the raw bytes (401 if invalid or missing)
    3. ACK with 200 immediately
    4. In the background: parse, normalize, forward to Camunda

    Any content type is accepted; the body is always treated as JSON.
    """

    body = await request.body()

    if not verify_signature(body, x_hub_signature_256, config.app_secret):
        logger.warning(f"Invalid or missing {SIGNATURE_HEADER}")
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    logger.debug("Signature verified for WhatsApp webhook")

    # Always ACK fast (<10s); do work after the response is sent
    background_tasks.add_task(process_inbound, body, forwarder)
    return PlainTextResponse("OK", status_code=status.HTTP_200_OK)


async def process_inbound(body: bytes, forwarder: CamundaForwarder) -> Optional[bool]:
    """
    Normalize an authenticated webhook body and forward it to Camunda.

    Runs detached from the request. Nothing raised here may escape:
    the caller already has its 200.

    Returns:
        Forward outcome, or None when nothing was forwarded
    """

    try:
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Signed webhook body is not valid JSON: {e}")
            return None

        inbound = extract_inbound(payload)
        if inbound is None:
            logger.debug("Non-message event received (likely status).")
            return None

        logger.debug(
            "Message normalized",
            extra={
                "wa_message_id": inbound.waMessageId,
                "phone": inbound.phone,
            }
        )

        return await forwarder.forward(inbound)

    except Exception as e:
        logger.error(f"Unexpected error processing webhook: {e}", exc_info=True)
        return None
