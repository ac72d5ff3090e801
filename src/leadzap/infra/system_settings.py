"""Key/value settings store backed by the system_settings table.

Values in the table win over environment fallbacks, so an operator can
switch the WhatsApp provider from the admin screen without a redeploy.
"""

from __future__ import annotations

import os
from typing import Iterable

from .db import fetchall, txn

# Settings key -> environment fallback
ENV_FALLBACKS: dict[str, str] = {
    "whatsapp_provider": "WHATSAPP_PROVIDER",
    "evolution_api_url": "EVOLUTION_API_URL",
    "evolution_api_key": "EVOLUTION_API_KEY",
    "evolution_instance_name": "EVOLUTION_INSTANCE",
    "waha_api_url": "WAHA_API_URL",
    "waha_api_key": "WAHA_API_KEY",
}


def get_settings(keys: Iterable[str]) -> dict[str, str]:
    """Load the requested keys, falling back to environment variables.

    Keys with no value in either place are omitted from the result.
    """
    wanted = list(keys)
    settings = _load_from_db(wanted)
    return _merge_with_env(wanted, settings)


def _load_from_db(keys: list[str]) -> dict[str, str]:
    with txn() as cur:
        rows = fetchall(
            cur,
            "SELECT key, value FROM system_settings WHERE key = ANY(%s)",
            (keys,),
        )
    return {key: _as_text(value) for key, value in rows if value not in (None, "")}


def _as_text(value: object) -> str:
    # value is JSONB in some deployments; plain strings come back unquoted
    return value if isinstance(value, str) else str(value)


def _merge_with_env(keys: list[str], db_settings: dict[str, str]) -> dict[str, str]:
    merged = dict(db_settings)
    for key in keys:
        if key in merged:
            continue
        env_name = ENV_FALLBACKS.get(key)
        env_value = os.environ.get(env_name, "") if env_name else ""
        if env_value:
            merged[key] = env_value
    return merged
