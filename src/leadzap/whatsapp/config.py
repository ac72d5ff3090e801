"""WhatsApp provider configuration.

Settings are stored as a loose key/value map. They are parsed here into one
frozen config per provider, so a missing field fails before anything is sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Union

from leadzap.errors import ConfigurationError
from leadzap.infra.system_settings import get_settings

SETTINGS_KEYS = (
    "whatsapp_provider",
    "evolution_api_url",
    "evolution_api_key",
    "evolution_instance_name",
    "waha_api_url",
    "waha_api_key",
)

DEFAULT_PROVIDER = "evolution"


@dataclass(frozen=True)
class EvolutionConfig:
    """Evolution API v2 settings. All fields required."""

    base_url: str
    api_key: str
    instance: str
    provider: Literal["evolution"] = "evolution"


@dataclass(frozen=True)
class WahaConfig:
    """WAHA settings. api_key is optional for unauthenticated gateways."""

    base_url: str
    api_key: str | None = None
    session: str = "default"
    provider: Literal["waha"] = "waha"


ProviderConfig = Union[EvolutionConfig, WahaConfig]


def _setting(settings: Mapping[str, str | None], key: str) -> str:
    value = settings.get(key)
    return value.strip() if value else ""


def parse_provider_config(settings: Mapping[str, str | None]) -> ProviderConfig:
    """Build the config for the selected provider.

    Args:
        settings: Raw settings map (see SETTINGS_KEYS).

    Returns:
        EvolutionConfig or WahaConfig.

    Raises:
        ConfigurationError: If the selected provider is unknown or one of
            its required fields is missing.
    """
    provider = _setting(settings, "whatsapp_provider").lower() or DEFAULT_PROVIDER

    if provider == "evolution":
        base_url = _setting(settings, "evolution_api_url")
        api_key = _setting(settings, "evolution_api_key")
        instance = _setting(settings, "evolution_instance_name")
        missing = [
            name
            for name, value in (
                ("evolution_api_url", base_url),
                ("evolution_api_key", api_key),
                ("evolution_instance_name", instance),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Incomplete Evolution config: missing {', '.join(missing)}"
            )
        return EvolutionConfig(
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            instance=instance,
        )

    if provider == "waha":
        base_url = _setting(settings, "waha_api_url")
        if not base_url:
            raise ConfigurationError("Incomplete WAHA config: missing waha_api_url")
        return WahaConfig(
            base_url=base_url.rstrip("/"),
            api_key=_setting(settings, "waha_api_key") or None,
        )

    raise ConfigurationError(f"Unknown whatsapp_provider: {provider}")


def load_provider_config() -> ProviderConfig:
    """Fetch settings from the store and parse them. Re-read on every call."""
    return parse_provider_config(get_settings(SETTINGS_KEYS))
