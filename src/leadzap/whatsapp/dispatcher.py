"""Outbound WhatsApp dispatch through the configured provider.

One call = resolve config -> build request -> POST (with timeout and one
bounded retry, see gateway.py) -> normalize result -> append an audit row.

Security: NEVER log the phone number or text. Only hashes, masks and lengths.
"""

from __future__ import annotations

from leadzap.infra.db import txn
from leadzap.infra.repositories.communication_log_repository import insert_entry
from leadzap.observability.logging import get_logger
from leadzap.observability.redaction import recipient_context, safe_log_context

from . import evolution, waha
from .config import EvolutionConfig, ProviderConfig, WahaConfig, load_provider_config
from .gateway import response_data, send_request
from .models import DispatchResult, OutboundRequest

logger = get_logger(__name__)


def build_request(config: ProviderConfig, phone: str, message: str) -> OutboundRequest:
    """Build the provider-specific send-text request."""
    if isinstance(config, WahaConfig):
        return waha.build_send_text(config, phone, message)
    if isinstance(config, EvolutionConfig):
        return evolution.build_send_text(config, phone, message)
    raise TypeError(f"unsupported provider config: {type(config).__name__}")


def _write_audit(phone: str, message: str, result: DispatchResult) -> None:
    """Append the communication_log row.

    Best effort: a failed insert is logged and never changes the send outcome.
    """
    try:
        with txn() as cur:
            insert_entry(
                cur,
                phone_number=phone,
                content=message,
                status="sent" if result.success else "failed",
                metadata={"provider": result.provider, "result": result.to_dict()},
            )
    except Exception as e:
        logger.error(
            "communication log write failed",
            extra={
                "extra_fields": safe_log_context(
                    provider=result.provider,
                    success=result.success,
                    error_type=type(e).__name__,
                )
            },
        )


def dispatch_message(
    phone: str,
    message: str,
    *,
    config: ProviderConfig | None = None,
) -> DispatchResult:
    """Send one text message through the configured WhatsApp provider.

    Args:
        phone: Recipient number, normally in canonical 55DDXXXXXXXXX form. NEVER logged.
        message: Message text. NEVER logged.
        config: Provider config; loaded from the settings store when None.

    Returns:
        DispatchResult. A gateway rejection (non-2xx) is success=False, not an error.

    Raises:
        ConfigurationError: If provider settings are incomplete. Nothing is
            sent and nothing is audited.
        requests.RequestException: On network errors after the retry.
    """
    if config is None:
        config = load_provider_config()

    request = build_request(config, phone, message)

    log_ctx = {"provider": config.provider, **recipient_context(phone, message)}
    logger.info("sending outbound message", extra={"extra_fields": log_ctx})

    response = send_request(request, log_ctx)

    result = DispatchResult(
        success=200 <= response.status_code < 300,
        provider=config.provider,
        data=response_data(response),
    )

    logger.info(
        "outbound message sent" if result.success else "provider rejected message",
        extra={"extra_fields": {**log_ctx, "status_code": response.status_code}},
    )

    _write_audit(phone, message, result)
    return result
