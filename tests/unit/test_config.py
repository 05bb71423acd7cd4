"""Tests for configuration module."""
import pytest
from currency_converter.config import Config, Settings, load_settings, DEFAULT_PROVIDER_BASE_URL
from currency_converter.utils.errors import ConfigurationError


def test_config_get_nested(temp_config_file):
    """Test getting nested config values."""
    config = Config(temp_config_file)
    assert config.get('provider.name') == 'fixer'
    assert config.get('provider.base_url') == 'http://fixer.test/api'


def test_config_get_default(temp_config_file):
    """Test default values."""
    config = Config(temp_config_file)
    assert config.get('nonexistent.key', 'default') == 'default'


def test_config_missing_file_uses_defaults():
    config = Config('nonexistent.yaml')
    assert config.get('provider.timeout', 5) == 5


def test_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ConfigurationError):
        Config(str(path))


def test_require_env(monkeypatch, temp_config_file):
    config = Config(temp_config_file)
    monkeypatch.setenv("SOME_SECRET", "value")
    assert config.require_env("SOME_SECRET") == "value"
    monkeypatch.delenv("SOME_SECRET")
    with pytest.raises(ConfigurationError):
        config.require_env("SOME_SECRET")


def test_load_settings(required_env, temp_config_file):
    settings = load_settings(temp_config_file)
    assert settings.fixer_api_key == "test-key"
    assert settings.database_url == "sqlite://"
    assert settings.provider_base_url == "http://fixer.test/api"
    assert settings.provider_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_load_settings_env_overrides(required_env, monkeypatch, temp_config_file):
    monkeypatch.setenv("FIXER_BASE_URL", "http://override.test/api")
    monkeypatch.setenv("PROVIDER_TIMEOUT", "1.5")
    settings = load_settings(temp_config_file)
    assert settings.provider_base_url == "http://override.test/api"
    assert settings.provider_timeout == 1.5


def test_load_settings_defaults_without_file(required_env):
    settings = load_settings("nonexistent.yaml")
    assert settings.provider_name == "fixer"
    assert settings.provider_base_url == DEFAULT_PROVIDER_BASE_URL


@pytest.mark.parametrize("missing", ["FIXER_API_KEY", "DATABASE_URL"])
def test_load_settings_requires_env(required_env, monkeypatch, temp_config_file, missing):
    monkeypatch.delenv(missing)
    with pytest.raises(ConfigurationError):
        load_settings(temp_config_file)


def test_load_settings_rejects_bad_timeout(required_env, monkeypatch, temp_config_file):
    monkeypatch.setenv("PROVIDER_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        load_settings(temp_config_file)


def test_settings_repr_masks_key():
    settings = Settings(fixer_api_key="super-secret", database_url="sqlite://")
    assert "super-secret" not in repr(settings)
