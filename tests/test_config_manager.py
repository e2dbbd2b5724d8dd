"""Tests for ConfigManager."""

import threading
from pathlib import Path

import pytest
import yaml

from commentwall.core.config_manager import API_URL_ENV_VAR, ConfigManager, DEFAULT_CONFIG
from commentwall.core.exceptions import ConfigError


def make_cm(tmp_dir, config=None, load=False):
    """Build a ConfigManager rooted at tmp_dir without touching the project tree."""
    ConfigManager.reset()
    cm = ConfigManager.__new__(ConfigManager)
    cm._initialized = True
    cm.PROJECT_ROOT = tmp_dir
    cm.CONFIG_PATH = tmp_dir / "config" / "settings.yaml"
    cm._config = ConfigManager._deep_copy(DEFAULT_CONFIG) if config is None else config
    cm._instance_lock = threading.RLock()
    ConfigManager._instance = cm
    if load:
        cm._load_or_create_config()
    return cm


class TestConfigManagerInit:
    def test_creates_default_config_when_missing(self, tmp_dir):
        cm = make_cm(tmp_dir, config={}, load=True)

        assert cm.CONFIG_PATH.exists()
        with open(cm.CONFIG_PATH, 'r', encoding='utf-8') as f:
            saved = yaml.safe_load(f)
        assert saved["api"]["base_url"] == "http://localhost:3000"

    def test_loads_existing_config(self, config_file, tmp_dir):
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump({"api": {"base_url": "https://wall.example", "timeout": 5}}, f)

        cm = make_cm(tmp_dir, config={}, load=True)
        assert cm.get("api.base_url") == "https://wall.example"
        assert cm.get("api.timeout") == 5

    def test_uses_defaults_on_invalid_yaml(self, config_file, tmp_dir):
        config_file.write_text("{{invalid yaml: [")

        cm = make_cm(tmp_dir, config={}, load=True)
        assert cm.get("app.locale") == "en_US"

    def test_singleton(self):
        ConfigManager.reset()
        a = ConfigManager.__new__(ConfigManager)
        b = ConfigManager.__new__(ConfigManager)
        assert a is b


class TestConfigManagerGetSet:
    def test_get_nested_key(self, tmp_dir):
        assert make_cm(tmp_dir).get("api.timeout") == 30

    def test_get_missing_key_returns_default(self, tmp_dir):
        cm = make_cm(tmp_dir)
        assert cm.get("nonexistent.key") is None
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_set_creates_nested_path(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.set("new.nested.key", "value")
        assert cm.get("new.nested.key") == "value"


class TestConfigManagerValidation:
    def test_invalid_locale_ignored(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"app.locale": "fr_FR"})
        assert cm.get("app.locale") == "en_US"

    def test_valid_locale_accepted(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"app.locale": "ko_KR"})
        assert cm.get("app.locale") == "ko_KR"

    def test_log_level_normalized(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"app.log_level": "debug"})
        assert cm.get("app.log_level") == "DEBUG"

    def test_invalid_log_level_ignored(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"app.log_level": "LOUD"})
        assert cm.get("app.log_level") == "INFO"

    def test_non_http_base_url_ignored(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"api.base_url": "ftp://wall.example"})
        assert cm.get("api.base_url") == "http://localhost:3000"

    def test_base_url_trailing_slash_stripped(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"api.base_url": "https://wall.example/"})
        assert cm.get("api.base_url") == "https://wall.example"

    def test_timeout_below_min_forced_to_1(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"api.timeout": 0})
        assert cm.get("api.timeout") == 1

    def test_update_saves_to_disk(self, tmp_dir):
        cm = make_cm(tmp_dir)
        cm.update({"api.timeout": 12})
        with open(cm.CONFIG_PATH, 'r', encoding='utf-8') as f:
            assert yaml.safe_load(f)["api"]["timeout"] == 12

    def test_save_failure_raises_config_error(self, tmp_dir):
        cm = make_cm(tmp_dir)
        # Parent "directory" is a regular file, so mkdir fails
        blocker = tmp_dir / "blocker"
        blocker.write_text("")
        cm.CONFIG_PATH = blocker / "settings.yaml"
        with pytest.raises(ConfigError):
            cm.save()


class TestApiBaseUrl:
    def test_environment_overrides_config(self, tmp_dir, monkeypatch):
        monkeypatch.setenv(API_URL_ENV_VAR, "https://env.example/")
        assert make_cm(tmp_dir).get_api_base_url() == "https://env.example"

    def test_falls_back_to_config(self, tmp_dir, monkeypatch):
        monkeypatch.delenv(API_URL_ENV_VAR, raising=False)
        cm = make_cm(tmp_dir)
        cm.set("api.base_url", "http://cfg.example/")
        assert cm.get_api_base_url() == "http://cfg.example"

    def test_blank_environment_value_ignored(self, tmp_dir, monkeypatch):
        monkeypatch.setenv(API_URL_ENV_VAR, "  ")
        assert make_cm(tmp_dir).get_api_base_url() == "http://localhost:3000"
