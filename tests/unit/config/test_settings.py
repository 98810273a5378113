from __future__ import annotations

from pathlib import Path

import pytest

from wirebox.config import (
    ConfigError,
    Environment,
    WireboxSettings,
    clear_settings_cache,
    get_settings,
    load_settings,
)
from wirebox.config.errors import CONFIG_ENVIRONMENT_ERROR
from wirebox.config.settings import env_files


def test_defaults():
    settings = load_settings()

    assert settings.env is Environment.DEVELOPMENT
    assert settings.registry_path is None
    assert settings.validate_implementations is True


def test_environment_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("WIREBOX_ENV", "prod")
    monkeypatch.setenv("WIREBOX_REGISTRY_PATH", str(tmp_path / "registry.yaml"))
    monkeypatch.setenv("WIREBOX_VALIDATE_IMPLEMENTATIONS", "0")

    settings = WireboxSettings()

    assert settings.env is Environment.PRODUCTION
    assert settings.registry_path == Path(tmp_path / "registry.yaml")
    assert settings.validate_implementations is False


def test_invalid_environment_variable_raises_config_error(monkeypatch):
    monkeypatch.setenv("WIREBOX_ENV", "staging")

    with pytest.raises(ConfigError) as exc_info:
        load_settings()

    assert exc_info.value.code == CONFIG_ENVIRONMENT_ERROR


def test_invalid_setting_value_raises_config_error(monkeypatch):
    monkeypatch.setenv("WIREBOX_VALIDATE_IMPLEMENTATIONS", "sometimes")

    with pytest.raises(ConfigError) as exc_info:
        load_settings()

    assert exc_info.value.context["settings_class"] == "WireboxSettings"
    assert exc_info.value.context["errors"]


def test_environment_selects_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("WIREBOX_REGISTRY_PATH=base.json\n", encoding="utf-8")
    (tmp_path / ".env.testing").write_text(
        "WIREBOX_VALIDATE_IMPLEMENTATIONS=false\nWIREBOX_REGISTRY_PATH=testing.json\n",
        encoding="utf-8",
    )

    development = load_settings()
    monkeypatch.setenv("ENV", "test")
    testing = load_settings()

    assert development.env is Environment.DEVELOPMENT
    assert development.registry_path == Path("base.json")
    assert development.validate_implementations is True
    assert testing.env is Environment.TESTING
    assert testing.registry_path == Path("testing.json")
    assert testing.validate_implementations is False


def test_env_files():
    assert env_files(Environment.PRODUCTION) == (".env", ".env.production")


def test_overrides_take_precedence(monkeypatch):
    monkeypatch.setenv("WIREBOX_ENV", "testing")

    settings = load_settings(env="production")

    assert settings.env is Environment.PRODUCTION


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("WIREBOX_ENV", "testing")

    assert get_settings() is first

    clear_settings_cache()
    assert get_settings().env is Environment.TESTING


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, Environment.DEVELOPMENT),
        ("dev", Environment.DEVELOPMENT),
        ("Test", Environment.TESTING),
        (" PRODUCTION ", Environment.PRODUCTION),
    ],
)
def test_environment_from_string(value, expected):
    assert Environment.from_string(value) is expected


def test_environment_from_string_rejects_unknown_values():
    with pytest.raises(ConfigError) as exc_info:
        Environment.from_string("staging")

    assert exc_info.value.code == CONFIG_ENVIRONMENT_ERROR
    assert exc_info.value.context == {"provided_value": "staging"}


def test_environment_get_current(monkeypatch):
    monkeypatch.setenv("ENV", "test")
    assert Environment.get_current() is Environment.TESTING

    monkeypatch.setenv("WIREBOX_ENV", "production")
    assert Environment.get_current() is Environment.PRODUCTION
