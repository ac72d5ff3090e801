"""Tests for the system_settings store (no real DB needed)."""

from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from leadzap.infra.system_settings import get_settings


def _patch_rows(rows):
    mock_cur = MagicMock()
    mock_cur.fetchall.return_value = rows

    @contextmanager
    def mock_txn():
        yield mock_cur

    return mock_cur, patch("leadzap.infra.system_settings.txn", mock_txn)


class TestGetSettings:
    def test_reads_requested_keys(self):
        mock_cur, patcher = _patch_rows(
            [("whatsapp_provider", "waha"), ("waha_api_url", "https://h.example.com")]
        )
        with patcher:
            settings = get_settings(["whatsapp_provider", "waha_api_url"])

        assert settings == {"whatsapp_provider": "waha", "waha_api_url": "https://h.example.com"}
        sql, params = mock_cur.execute.call_args[0]
        assert "system_settings" in sql
        assert params == (["whatsapp_provider", "waha_api_url"],)

    def test_empty_values_omitted(self):
        _, patcher = _patch_rows([("waha_api_key", ""), ("waha_api_url", None)])
        with patcher:
            assert get_settings(["waha_api_key", "waha_api_url"]) == {}

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("EVOLUTION_API_URL", "https://env.example.com")
        _, patcher = _patch_rows([])
        with patcher:
            settings = get_settings(["evolution_api_url", "evolution_api_key"])

        assert settings == {"evolution_api_url": "https://env.example.com"}

    def test_db_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("WHATSAPP_PROVIDER", "evolution")
        _, patcher = _patch_rows([("whatsapp_provider", "waha")])
        with patcher:
            assert get_settings(["whatsapp_provider"]) == {"whatsapp_provider": "waha"}

    def test_env_not_used_for_unrequested_keys(self, monkeypatch):
        monkeypatch.setenv("WAHA_API_KEY", "secret")
        _, patcher = _patch_rows([])
        with patcher:
            assert get_settings(["waha_api_url"]) == {}
