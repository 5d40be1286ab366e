"""
Camunda Webhook Forwarder

Relays a NormalizedMessage to the Camunda webhook start event.
One attempt, Basic auth, bounded timeout. No retries. Never raises.
"""

import base64
import logging

import httpx

from config import RelayConfig
from transport.whatsapp.schemas import NormalizedMessage

logger = logging.getLogger(__name__)


def build_basic_auth_header(username: str, password: str) -> str:
    """Authorization header value for HTTP Basic auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class CamundaForwarder:
    """
    Posts normalized WhatsApp messages to Camunda.

    Failures are logged and swallowed: the inbound webhook has already
    been acknowledged, and Meta's own redelivery is the only recovery path.
    """

    def __init__(self, config: RelayConfig):
        self.url = config.camunda_webhook_url
        self.timeout = config.camunda_timeout_seconds
        self._authorization = build_basic_auth_header(
            config.camunda_basic_user,
            config.camunda_basic_pass,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": self._authorization,
            "Content-Type": "application/json",
        }

    async def forward(self, message: NormalizedMessage) -> bool:
        """
        Send message to Camunda.

        Args:
            message: The normalized inbound message

        Returns:
            True if Camunda answered 2xx, False otherwise
        """

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.url,
                    json=message.model_dump(mode="json"),
                    headers=self.headers,
                    timeout=self.timeout,
                )

            if not response.is_success:
                logger.error(
                    f"Forward to Camunda failed: {response.status_code} {_safe_text(response)}",
                    extra={
                        "status_code": response.status_code,
                        "wa_message_id": message.waMessageId,
                    }
                )
                return False

            logger.info(
                f"Forwarded to Camunda: {message.phone} {message.text}",
                extra={"wa_message_id": message.waMessageId},
            )
            return True

        except httpx.HTTPError as e:
            logger.error(
                f"Error forwarding to Camunda: {e}",
                exc_info=True,
                extra={"wa_message_id": message.waMessageId},
            )
            return False

        except Exception as e:
            logger.error(
                f"Unexpected error forwarding to Camunda: {e}",
                exc_info=True,
                extra={"wa_message_id": message.waMessageId},
            )
            return False


def _safe_text(response: httpx.Response) -> str:
    """Response body for logging; empty if it cannot be read."""
    try:
        return response.text
    except Exception:
        return ""
