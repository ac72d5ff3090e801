"""Tests for Brazilian phone normalization, display and validation."""

import pytest

from leadzap.phone import (
    clean_phone_number,
    format_phone_display,
    is_valid_brazilian_phone,
    mask_phone,
    normalize_phone_number,
    to_whatsapp_chat_id,
)


class TestNormalize:
    """Tests for normalize_phone_number()."""

    @pytest.mark.parametrize(
        "raw",
        [
            "(85) 99622-7722",
            "85996227722",
            "85 99622-7722",
            "+55 85 99622-7722",
            "5585996227722",
        ],
    )
    def test_common_formats(self, raw):
        assert normalize_phone_number(raw) == "5585996227722"

    def test_empty_and_none(self):
        assert normalize_phone_number("") == ""
        assert normalize_phone_number(None) == ""

    def test_twelve_digits_get_country_code(self):
        assert normalize_phone_number("551199622772") == "55551199622772"

    def test_ten_digits_get_default_area_code(self):
        assert normalize_phone_number("9962277221") == "55859962277221"

    def test_nine_digits_get_default_area_code(self):
        assert normalize_phone_number("99622-7722") == "5585996227722"

    def test_short_input_gets_default_area_code(self):
        assert normalize_phone_number("96227722") == "558596227722"

    def test_separators_only(self):
        assert normalize_phone_number("()-") == "5585"

    def test_thirteen_digits_without_country_code(self):
        assert normalize_phone_number("1234567890123") == "551234567890123"

    def test_long_input_with_country_code_unchanged(self):
        assert normalize_phone_number("55859962277221") == "55859962277221"

    def test_default_area_code_override(self):
        assert normalize_phone_number("996227722", default_area_code="11") == "5511996227722"

    def test_default_area_code_from_env(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_AREA_CODE", "21")
        assert normalize_phone_number("996227722") == "5521996227722"

    def test_invalid_default_area_code(self):
        with pytest.raises(ValueError):
            normalize_phone_number("996227722", default_area_code="1")

    @pytest.mark.parametrize("env_value", ["8", "085", "abc"])
    def test_malformed_env_area_code_falls_back(self, monkeypatch, env_value):
        monkeypatch.setenv("DEFAULT_AREA_CODE", env_value)
        assert normalize_phone_number("996227722") == "5585996227722"

    def test_area_code_override_ignored_when_input_has_one(self):
        assert normalize_phone_number("85996227722", default_area_code="11") == "5585996227722"

    @pytest.mark.parametrize("value", ["5585996227722", "5511987654321", "5500000000000"])
    def test_idempotent_on_canonical(self, value):
        once = normalize_phone_number(value)
        assert normalize_phone_number(once) == once == value


class TestFormatDisplay:
    """Tests for format_phone_display()."""

    def test_formats_normalized(self):
        assert format_phone_display(normalize_phone_number("85996227722")) == "(85) 99622-7722"

    def test_formats_raw(self):
        assert format_phone_display("+55 (11) 98765-4321") == "(11) 98765-4321"

    def test_non_canonical_returned_unchanged(self):
        assert format_phone_display("551199622772") == "551199622772"

    def test_empty(self):
        assert format_phone_display("") == ""
        assert format_phone_display(None) == ""


class TestIsValid:
    """Tests for is_valid_brazilian_phone()."""

    def test_valid(self):
        assert is_valid_brazilian_phone("5585996227722") is True
        assert is_valid_brazilian_phone("(85) 99622-7722") is True

    def test_twelve_digits_invalid(self):
        assert is_valid_brazilian_phone("551199622772") is False

    def test_area_code_below_11(self):
        assert is_valid_brazilian_phone("5505996227722") is False

    def test_landline_first_digit(self):
        assert is_valid_brazilian_phone("5585896227722") is False

    def test_empty(self):
        assert is_valid_brazilian_phone("") is False
        assert is_valid_brazilian_phone(None) is False

    def test_short_landline_invalid(self):
        assert is_valid_brazilian_phone("3222-1234") is False

    def test_malformed_env_area_code_still_returns_bool(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_AREA_CODE", "8")
        assert is_valid_brazilian_phone("996227722") is True
        assert is_valid_brazilian_phone("3222-1234") is False


class TestHelpers:
    """Tests for clean/chat-id/mask helpers."""

    def test_clean(self):
        assert clean_phone_number("+55 (85) 99622-7722") == "5585996227722"
        assert clean_phone_number("") == ""

    @pytest.mark.parametrize("raw", ["85996227722", "+55 11 98765-4321", "996227722"])
    def test_display_round_trip(self, raw):
        canonical = normalize_phone_number(raw)
        cleaned = clean_phone_number(format_phone_display(canonical))
        assert normalize_phone_number(cleaned) == canonical

    def test_chat_id(self):
        assert to_whatsapp_chat_id("+55 85 99622-7722") == "5585996227722@c.us"

    def test_mask(self):
        assert mask_phone("5585996227722") == "5585*****7722"
        assert "99622" not in mask_phone("5585996227722")

    def test_mask_short(self):
        assert mask_phone("1234") == "****"
