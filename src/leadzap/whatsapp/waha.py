"""WAHA (WhatsApp HTTP API) request builders."""

from typing import Any

from leadzap.phone import clean_phone_number, to_whatsapp_chat_id

from .config import WahaConfig
from .models import OutboundRequest


def build_send_text(config: WahaConfig, phone: str, message: str) -> OutboundRequest:
    """Build POST {base_url}/api/send/text.

    WAHA addresses chats as ``<digits>@c.us``; X-Api-Key is sent only when
    a key is configured.
    """
    headers = {"Content-Type": "application/json"}
    if config.api_key:
        headers["X-Api-Key"] = config.api_key

    return OutboundRequest(
        url=f"{config.base_url}/api/send/text",
        json={
            "chatId": to_whatsapp_chat_id(phone),
            "text": message,
            "session": config.session,
        },
        headers=headers,
    )


def build_check_number(config: WahaConfig, phone: str) -> OutboundRequest:
    """Build GET {base_url}/api/contacts/check-exists."""
    headers = {}
    if config.api_key:
        headers["X-Api-Key"] = config.api_key

    return OutboundRequest(
        url=f"{config.base_url}/api/contacts/check-exists",
        method="GET",
        params={"phone": clean_phone_number(phone), "session": config.session},
        headers=headers,
    )


def parse_check_number(data: Any) -> bool:
    """WAHA answers {numberExists, chatId}."""
    return isinstance(data, dict) and data.get("numberExists") is True
