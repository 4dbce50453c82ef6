import pytest
from pydantic import ValidationError

from xcoobee_sdk.config import DEFAULT_API_URL_ROOT
from xcoobee_sdk.config import Config
from xcoobee_sdk.config import XcooBeeSettings


def test_xcoobee_settings_env(monkeypatch):
    # Set environment variables to test values
    monkeypatch.setenv("XCOOBEE_API_KEY", "env-key")
    monkeypatch.setenv("XCOOBEE_API_SECRET", "env-secret")
    monkeypatch.setenv("XCOOBEE_CAMPAIGN_ID", "env-campaign")
    monkeypatch.setenv("XCOOBEE_TIMEOUT", "15")
    monkeypatch.setenv("XCOOBEE_ERROR_RESPONSE_CODE", "422")

    settings = XcooBeeSettings(_env_file=None)
    assert settings.api_key == "env-key"
    assert settings.api_secret == "env-secret"
    assert settings.campaign_id == "env-campaign"
    assert settings.timeout == 15
    assert settings.error_response_code == 422


def test_xcoobee_settings_defaults(monkeypatch):
    for name in ("XCOOBEE_API_KEY", "XCOOBEE_API_URL_ROOT", "XCOOBEE_TRANSPORT"):
        monkeypatch.delenv(name, raising=False)

    settings = XcooBeeSettings(_env_file=None)
    assert settings.api_url_root == DEFAULT_API_URL_ROOT
    assert settings.transport == "httpx"
    assert settings.token_expiration_tolerance_ms == 10000
    assert settings.error_response_code == 400


def test_to_config_without_api_key_is_none(monkeypatch):
    monkeypatch.delenv("XCOOBEE_API_KEY", raising=False)
    assert XcooBeeSettings(_env_file=None).to_config() is None


def test_to_config_copies_credentials():
    settings = XcooBeeSettings(
        _env_file=None, api_key="k", api_secret="s", campaign_id="c", pgp_password="p"
    )
    config = settings.to_config()

    assert config == Config(
        api_key="k",
        api_secret="s",
        api_url_root=settings.api_url_root,
        campaign_id="c",
        pgp_password="p",
    )


def test_config_is_immutable():
    config = Config(api_key="k")
    with pytest.raises(ValidationError):
        config.api_key = "other"
