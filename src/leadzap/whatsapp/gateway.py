"""HTTP calls to the WhatsApp gateway: explicit timeout, one bounded retry.

Network errors and 5xx replies are retried after WHATSAPP_RETRY_DELAY plus
random jitter. A 5xx that survives the retries is returned to the caller;
network errors are re-raised.
"""

from __future__ import annotations

import os
import random
import time
from typing import Any

import requests

from leadzap.observability.logging import get_logger

from .models import OutboundRequest

logger = get_logger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_MAX_RETRIES = 1
DEFAULT_RETRY_DELAY = 0.2


def _http_settings() -> tuple[float, int, float]:
    """(timeout, max_retries, retry_delay) from the environment. Never negative."""
    return (
        float(os.environ.get("WHATSAPP_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
        max(0, int(os.environ.get("WHATSAPP_MAX_RETRIES", DEFAULT_MAX_RETRIES))),
        max(0.0, float(os.environ.get("WHATSAPP_RETRY_DELAY", DEFAULT_RETRY_DELAY))),
    )


def _do_request(request: OutboundRequest, timeout: float) -> requests.Response:
    """Execute the HTTP call. Raises requests.RequestException on network errors."""
    return requests.request(
        request.method,
        request.url,
        json=request.json,
        params=request.params,
        headers=request.headers,
        timeout=timeout,
    )


def _backoff(retry_delay: float) -> None:
    time.sleep(retry_delay + random.uniform(0, retry_delay))


def response_data(response: requests.Response) -> Any:
    """Decoded JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def send_request(request: OutboundRequest, log_ctx: dict[str, Any]) -> requests.Response:
    """Execute request with the configured timeout and retry budget.

    Args:
        request: Prepared gateway request. NEVER logged.
        log_ctx: PII-free log fields (hashes, lengths, provider).

    Raises:
        requests.RequestException: On network errors after the last attempt.
    """
    timeout, max_retries, retry_delay = _http_settings()
    attempt = 0

    while True:
        is_last = attempt >= max_retries
        try:
            response = _do_request(request, timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            fields = {**log_ctx, "attempt": attempt, "error_type": type(e).__name__}
            if is_last:
                logger.error("gateway request failed", extra={"extra_fields": fields})
                raise
            logger.warning(
                "gateway request failed, retrying", extra={"extra_fields": fields}
            )
        else:
            if response.status_code < 500 or is_last:
                return response
            logger.warning(
                "gateway returned server error, retrying",
                extra={
                    "extra_fields": {
                        **log_ctx,
                        "attempt": attempt,
                        "status_code": response.status_code,
                    }
                },
            )

        _backoff(retry_delay)
        attempt += 1
