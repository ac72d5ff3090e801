"""Shared pytest fixtures for leadzap tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402

_ENV_VARS = (
    "DEFAULT_AREA_CODE",
    "WHATSAPP_PROVIDER",
    "EVOLUTION_API_URL",
    "EVOLUTION_API_KEY",
    "EVOLUTION_INSTANCE",
    "WAHA_API_URL",
    "WAHA_API_KEY",
    "WHATSAPP_HTTP_TIMEOUT",
    "WHATSAPP_MAX_RETRIES",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer env vars out of tests and make retries instant."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WHATSAPP_RETRY_DELAY", "0")
