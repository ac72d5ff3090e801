"""Redaction helpers for safe logging.

Phone numbers and message bodies are PII. Log hashes, masks and lengths only.
"""

import hashlib
import re
from typing import Any

from leadzap.phone import mask_phone

_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"


def hash_identifier(value: str) -> str:
    """Non-reversible short hash (first 12 hex chars of sha256)."""
    return hashlib.sha256(value.encode()).hexdigest()[:12]


def redact_string(value: str) -> str:
    """Replace phone numbers and e-mail addresses in free text."""
    return _EMAIL_PATTERN.sub(_REDACTED, _PHONE_PATTERN.sub(_REDACTED, value))


def redact_value(value: Any) -> Any:
    """Redact a value for logging.

    Scalars keep their JSON type so dashboards can filter on them;
    containers collapse to their shape.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        return f"dict(keys={sorted(value.keys())})"
    if isinstance(value, (list, tuple)):
        return f"list(len={len(value)})"
    return f"<{type(value).__name__}>"


def safe_log_context(**kwargs: Any) -> dict[str, Any]:
    """Build an extra_fields dict with every value redacted."""
    return {k: redact_value(v) for k, v in kwargs.items()}


def recipient_context(phone: str, text: str) -> dict[str, Any]:
    """Log context for an outbound message without the phone or text."""
    return {
        "to_hash": hash_identifier(phone),
        "to_masked": mask_phone(phone),
        "text_len": len(text),
    }
