import pytest

from mapquest.core import config


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in (
        "MAPQUEST_API_KEY",
        "MAPQUEST_BASE_URL",
        "MAPQUEST_TIMEOUT",
        "MAPQUEST_USER_AGENT",
        "MAPQUEST_DEFAULT_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("MAPQUEST_API_KEY", "abc123")
    monkeypatch.setenv("MAPQUEST_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("MAPQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("MAPQUEST_USER_AGENT", "geo-tests/1.0")
    monkeypatch.setenv("MAPQUEST_DEFAULT_LIMIT", "25")

    settings = config.get_settings()

    assert settings.api_key == "abc123"
    assert settings.base_url == "http://localhost:8080"
    assert settings.timeout == 2.5
    assert settings.user_agent == "geo-tests/1.0"
    assert settings.default_limit == 25


def test_get_settings_defaults_and_warns_when_key_missing(caplog):
    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "MAPQUEST_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.api_key == ""
    assert settings.base_url == config.DEFAULT_BASE_URL
    assert settings.timeout == 10.0
    assert settings.user_agent is None
    assert settings.default_limit == 10


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("MAPQUEST_API_KEY", "first")
    first = config.get_settings()
    monkeypatch.setenv("MAPQUEST_API_KEY", "second")
    assert config.get_settings() is first


def test_get_settings_rejects_invalid_numbers(monkeypatch):
    monkeypatch.setenv("MAPQUEST_TIMEOUT", "soon")
    with pytest.raises(config.ConfigError):
        config.get_settings()
