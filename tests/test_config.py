"""Tests for settings and the stamp URLs built from them."""
from app.core.config import Settings, get_nfc_url, get_stamp_url


def test_stamp_and_nfc_urls():
    assert get_stamp_url("cafe-1") == "https://findmeacoffee.in/stamp/cafe-1"
    assert get_nfc_url("cafe-1") == "findmeacoffee://stamp/cafe-1"


def test_settings_fields():
    fields = set(Settings.model_fields)

    assert {"supabase_url", "stamp_base_url", "nfc_url_scheme", "redemption_code_length"} <= fields
    assert "base_url" not in fields


def test_loyalty_defaults(monkeypatch):
    monkeypatch.delenv("REDEMPTION_CODE_LENGTH", raising=False)
    monkeypatch.delenv("ACTIVE_CUSTOMER_WINDOW_DAYS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.redemption_code_length == 6
    assert settings.redemption_list_limit == 50
    assert settings.active_customer_window_days == 7
