import pytest
from pydantic import ValidationError

from cheap_playitas.config import DEFAULT_PRICES_URL, Settings, get_settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PRICES_URL", "https://prices.test/api")
    monkeypatch.setenv("HTTP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    cfg = get_settings()
    get_settings.cache_clear()
    assert isinstance(cfg, Settings)
    assert cfg.prices_url == "https://prices.test/api"
    assert cfg.http_timeout_s == 2.5
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file is None


def test_settings_defaults(monkeypatch):
    for name in ("PRICES_URL", "HTTP_TIMEOUT_S", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    cfg = Settings()
    assert cfg.prices_url == DEFAULT_PRICES_URL
    assert cfg.http_timeout_s == 15.0
    assert cfg.log_level == "INFO"


@pytest.mark.parametrize(
    "name, value",
    [("HTTP_TIMEOUT_S", "0"), ("LOG_LEVEL", "LOUD"), ("PRICES_URL", "  ")],
)
def test_invalid_settings(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()
