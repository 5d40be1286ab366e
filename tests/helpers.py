"""Payload builders shared by the relay tests."""

import json

from transport.whatsapp.security import compute_signature

APP_SECRET = "test_app_secret"
VERIFY_TOKEN = "test_verify_token"
CAMUNDA_URL = "https://camunda.example.com/inbound/start"


def make_payload(message: dict) -> dict:
    """Wrap a single message object in a WhatsApp webhook envelope."""
    return {
        "object": "whatsapp_business_account",
        "entry": [{
            "id": "WABA_ID",
            "changes": [{
                "field": "messages",
                "value": {
                    "messaging_product": "whatsapp",
                    "metadata": {"phone_number_id": "PHONE_ID"},
                    "messages": [message],
                },
            }],
        }],
    }


def text_message(body: str = "Hello", sender: str = "15551234567") -> dict:
    return {
        "from": sender,
        "id": "wamid.msg_123",
        "timestamp": "1707500000",
        "type": "text",
        "text": {"body": body},
    }


def status_payload() -> dict:
    """Delivery receipt: statuses, no messages."""
    return {
        "object": "whatsapp_business_account",
        "entry": [{
            "id": "WABA_ID",
            "changes": [{
                "field": "messages",
                "value": {
                    "messaging_product": "whatsapp",
                    "statuses": [{
                        "id": "wamid.msg_123",
                        "status": "delivered",
                        "timestamp": "1707500001",
                        "recipient_id": "15551234567",
                    }],
                },
            }],
        }],
    }


def signed(payload: dict, secret: str = APP_SECRET) -> tuple[bytes, dict[str, str]]:
    """Raw body plus headers carrying a valid X-Hub-Signature-256."""
    body = json.dumps(payload).encode()
    return body, {
        "X-Hub-Signature-256": compute_signature(body, secret),
        "Content-Type": "application/json",
    }
