"""Settings parsing."""

import pytest
from pydantic import ValidationError

from carbon_trace.core.config import EnvironmentMode, Settings


def test_defaults(monkeypatch):
    for name in ("NODE_ENV", "ENV_MODE", "PORT", "API_PORT", "GOOGLE_API_KEY", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.env_mode is EnvironmentMode.DEVELOPMENT
    assert settings.api_port == 5000
    assert settings.database_url == "sqlite+aiosqlite:///./carbon_trace.db"
    assert settings.has_ai_credential is False


def test_node_env_and_port_aliases(monkeypatch):
    monkeypatch.setenv("NODE_ENV", "Production")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.delenv("ENV_MODE", raising=False)
    monkeypatch.delenv("API_PORT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.is_production
    assert not settings.is_development
    assert settings.api_port == 8080


def test_invalid_env_mode():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env_mode="moon")


@pytest.mark.parametrize(
    "key, expected",
    [
        (None, False),
        ("", False),
        ("your-fallback-key-here", False),
        ("AIza-real", True),
    ],
)
def test_has_ai_credential(key, expected):
    assert Settings(_env_file=None, google_api_key=key).has_ai_credential is expected
