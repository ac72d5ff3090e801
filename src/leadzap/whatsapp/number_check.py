"""Does a phone number have a WhatsApp account?

Asks the configured gateway and caches the answer for 24 hours in
whatsapp_number_verification. The cache is best effort on both read and
write: a database failure only costs a gateway round trip.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from leadzap.errors import GatewayError
from leadzap.infra.db import txn
from leadzap.infra.repositories.number_verification_repository import (
    NumberVerification,
    get_verification,
    upsert_verification,
)
from leadzap.observability.logging import get_logger
from leadzap.observability.redaction import hash_identifier

from . import evolution, waha
from .config import ProviderConfig, WahaConfig, load_provider_config
from .gateway import response_data, send_request
from .models import NumberCheckResult

logger = get_logger(__name__)

CACHE_TTL = timedelta(hours=24)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _read_cache(phone: str, log_ctx: dict) -> NumberVerification | None:
    try:
        with txn() as cur:
            return get_verification(cur, phone)
    except Exception as e:
        logger.warning(
            "number verification cache read failed",
            extra={"extra_fields": {**log_ctx, "error_type": type(e).__name__}},
        )
        return None


def _write_cache(phone: str, exists: bool, verified_at: datetime, log_ctx: dict) -> None:
    try:
        with txn() as cur:
            upsert_verification(
                cur,
                phone_number=phone,
                exists_on_whatsapp=exists,
                verified_at=verified_at,
            )
    except Exception as e:
        logger.warning(
            "number verification cache write failed",
            extra={"extra_fields": {**log_ctx, "error_type": type(e).__name__}},
        )


def _ask_gateway(config: ProviderConfig, phone: str, log_ctx: dict) -> bool:
    if isinstance(config, WahaConfig):
        request, parse = waha.build_check_number(config, phone), waha.parse_check_number
    else:
        request, parse = evolution.build_check_number(config, phone), evolution.parse_check_number

    response = send_request(request, log_ctx)
    if not 200 <= response.status_code < 300:
        logger.error(
            "number check rejected by gateway",
            extra={"extra_fields": {**log_ctx, "status_code": response.status_code}},
        )
        raise GatewayError(f"number check failed with HTTP {response.status_code}")
    return parse(response_data(response))


def check_number(
    phone: str,
    *,
    config: ProviderConfig | None = None,
    now: datetime | None = None,
) -> NumberCheckResult:
    """Check whether phone (canonical 55DDXXXXXXXXX) is on WhatsApp.

    Args:
        phone: Canonical phone number. NEVER logged.
        config: Provider config; loaded from the settings store when None
            and the cache misses.
        now: Current time, for cache age.

    Raises:
        ConfigurationError: If provider settings are incomplete.
        GatewayError: If the gateway answers non-2xx.
        requests.RequestException: On network errors after the retry.
    """
    now = now or datetime.now(timezone.utc)
    log_ctx = {"to_hash": hash_identifier(phone)}

    cached = _read_cache(phone, log_ctx)
    if cached is not None and now - _as_utc(cached.last_verified_at) < CACHE_TTL:
        logger.info("number check served from cache", extra={"extra_fields": log_ctx})
        return NumberCheckResult(
            phone_number=phone,
            exists=cached.exists_on_whatsapp,
            cached=True,
            last_verified_at=cached.last_verified_at,
        )

    if config is None:
        config = load_provider_config()
    log_ctx["provider"] = config.provider

    exists = _ask_gateway(config, phone, log_ctx)
    logger.info("number checked", extra={"extra_fields": {**log_ctx, "exists": exists}})

    _write_cache(phone, exists, now, log_ctx)
    return NumberCheckResult(phone_number=phone, exists=exists, cached=False, last_verified_at=now)
