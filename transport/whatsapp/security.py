"""
WhatsApp Signature Verification

SECURITY BOUNDARY - Verify Meta HMAC signature and the subscription handshake.
Pure functions of their inputs. Fail closed.
"""

import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="
SUBSCRIBE_MODE = "subscribe"


def compute_signature(body: bytes, app_secret: str) -> str:
    """Return the X-Hub-Signature-256 value Meta would send for body."""
    return SIGNATURE_PREFIX + hmac.new(
        key=app_secret.encode("utf-8"),
        msg=body,
        digestmod=hashlib.sha256
    ).hexdigest()


def verify_signature(
    body: bytes,
    signature: Optional[str],
    app_secret: Optional[str],
) -> bool:
    """
    Verify Meta HMAC-SHA256 signature on a WhatsApp webhook.

    The HMAC is computed over the raw request body exactly as received,
    never over a re-serialized JSON document.

    Args:
        body: Raw request body bytes
        signature: X-Hub-Signature-256 header value ("sha256=<hex>")
        app_secret: Meta app secret

    Returns:
        True only if the signature matches
    """

    if not signature or not app_secret:
        return False

    try:
        expected = compute_signature(body, app_secret)
        # Constant-time; differing lengths fail without early exit on content
        return hmac.compare_digest(
            signature.encode("ascii"),
            expected.encode("ascii"),
        )
    except Exception as e:
        logger.debug(f"Signature comparison failed: {e}")
        return False


def verify_webhook_challenge(
    hub_mode: Optional[str],
    hub_verify_token: Optional[str],
    hub_challenge: Optional[str],
    expected_token: str,
) -> Optional[str]:
    """
    Verify webhook subscription challenge from Meta.

    Meta calls GET /wa/webhook with:
    - hub.mode=subscribe
    - hub.challenge=random_string
    - hub.verify_token=configured_token

    Returns:
        The challenge string to echo back, or None if verification failed
    """

    if hub_mode != SUBSCRIBE_MODE:
        return None

    if hub_verify_token is None or not hmac.compare_digest(
        hub_verify_token.encode("utf-8"),
        expected_token.encode("utf-8"),
    ):
        return None

    return hub_challenge or ""
