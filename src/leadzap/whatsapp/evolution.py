"""Evolution API v2 request builders."""

from typing import Any

from .config import EvolutionConfig
from .models import OutboundRequest

# Typing indicator shown to the recipient before delivery
SEND_DELAY_MS = 1200
PRESENCE = "composing"


def build_send_text(config: EvolutionConfig, phone: str, message: str) -> OutboundRequest:
    """Build POST {base_url}/message/sendText/{instance}.

    Evolution v2 takes the bare number (no JID suffix) in ``number``.
    """
    return OutboundRequest(
        url=f"{config.base_url}/message/sendText/{config.instance}",
        json={
            "number": phone,
            "text": message,
            "options": {"delay": SEND_DELAY_MS, "presence": PRESENCE},
        },
        headers={
            "Content-Type": "application/json",
            "apikey": config.api_key,
        },
    )


def build_check_number(config: EvolutionConfig, phone: str) -> OutboundRequest:
    """Build POST {base_url}/chat/whatsappNumbers/{instance}."""
    return OutboundRequest(
        url=f"{config.base_url}/chat/whatsappNumbers/{config.instance}",
        json={"numbers": [phone]},
        headers={
            "Content-Type": "application/json",
            "apikey": config.api_key,
        },
    )


def parse_check_number(data: Any) -> bool:
    """Evolution answers a list of {jid, exists}, one per requested number."""
    return (
        isinstance(data, list)
        and len(data) > 0
        and isinstance(data[0], dict)
        and data[0].get("exists") is True
    )
