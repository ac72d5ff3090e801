"""Brazilian phone number normalization and validation.

Canonical form is 13 digits: ``55`` + area code (2) + mobile number (9),
e.g. ``5585996227722``. Accepts any free-form input such as
``(85) 99622-7722``, ``85 99622-7722`` or ``+55 85 99622-7722``.

Inputs too short to carry an area code get ``DEFAULT_AREA_CODE`` (85).
That is a business default, not a rule: numbers from other area codes
typed without their area code are silently assigned to 85. Override per
call with ``default_area_code=`` or globally with the ``DEFAULT_AREA_CODE``
environment variable.
"""

from __future__ import annotations

import os
import re

from leadzap.observability.logging import get_logger

logger = get_logger(__name__)

COUNTRY_CODE = "55"
DEFAULT_AREA_CODE = "85"
CANONICAL_LENGTH = 13

_NON_DIGIT = re.compile(r"\D")


def _resolve_area_code(default_area_code: str | None) -> str:
    if default_area_code:
        area_code = clean_phone_number(default_area_code)
        if len(area_code) != 2:
            raise ValueError(f"default area code must have 2 digits, got {area_code!r}")
        return area_code

    # A bad deployment setting must not turn validation into a crash
    env_value = os.environ.get("DEFAULT_AREA_CODE")
    if env_value:
        area_code = clean_phone_number(env_value)
        if len(area_code) == 2:
            return area_code
        logger.warning(
            "ignoring malformed DEFAULT_AREA_CODE",
            extra={"extra_fields": {"fallback": DEFAULT_AREA_CODE}},
        )
    return DEFAULT_AREA_CODE


def clean_phone_number(value: str | None) -> str:
    """Strip everything but digits. No normalization."""
    if not value:
        return ""
    return _NON_DIGIT.sub("", value)


def normalize_phone_number(
    value: str | None,
    *,
    default_area_code: str | None = None,
) -> str:
    """Normalize a Brazilian phone number to ``55DDXXXXXXXXX``.

    Args:
        value: Phone number in any format. None/empty returns "".
        default_area_code: Area code assumed when the input has 10 digits
            or fewer. Falls back to DEFAULT_AREA_CODE env var, then "85"
            (a malformed env value is ignored with a warning).

    Returns:
        Digit string. Only 13-digit results are canonical; see
        is_valid_brazilian_phone() for the structural checks.
    """
    if not value:
        return ""

    digits = clean_phone_number(value)
    length = len(digits)

    if length == CANONICAL_LENGTH and digits.startswith(COUNTRY_CODE):
        return digits

    # 11 and 12 digits are assumed to already carry an area code
    if length in (11, 12):
        return f"{COUNTRY_CODE}{digits}"

    if length <= 10:
        area_code = _resolve_area_code(default_area_code)
        logger.debug(
            "assuming default area code",
            extra={"extra_fields": {"area_code": area_code, "digit_count": length}},
        )
        return f"{COUNTRY_CODE}{area_code}{digits}"

    return digits if digits.startswith(COUNTRY_CODE) else f"{COUNTRY_CODE}{digits}"


def format_phone_display(value: str | None) -> str:
    """Format for display: 5585996227722 -> (85) 99622-7722.

    Returns the input unchanged when it does not normalize to 13 digits.
    """
    if not value:
        return ""

    normalized = normalize_phone_number(value)
    if len(normalized) != CANONICAL_LENGTH:
        return value

    area_code = normalized[2:4]
    return f"({area_code}) {normalized[4:9]}-{normalized[9:13]}"


def is_valid_brazilian_phone(value: str | None) -> bool:
    """Return True if value normalizes to a valid Brazilian mobile number."""
    if not value:
        return False

    normalized = normalize_phone_number(value)

    if len(normalized) != CANONICAL_LENGTH:
        return False
    if not normalized.startswith(COUNTRY_CODE):
        return False
    if not 11 <= int(normalized[2:4]) <= 99:
        return False
    # Mobile numbers start with 9
    return normalized[4] == "9"


def to_whatsapp_chat_id(value: str) -> str:
    """WAHA chat id: digits + ``@c.us``."""
    return f"{clean_phone_number(value)}@c.us"


def mask_phone(value: str | None) -> str:
    """Log-safe rendering: keeps country/area code and last 4 digits."""
    digits = clean_phone_number(value)
    if len(digits) <= 8:
        return "*" * len(digits)
    return f"{digits[:4]}{'*' * (len(digits) - 8)}{digits[-4:]}"
