"""Tests for settings and the JSON config store."""

import json

from dido.config.settings import get_settings
from dido.config.store import ConfigStore
from dido.core.constants import DEFAULT_MODEL, DEFAULT_SKIP_DIRECTORIES


class TestConfigStore:
    def test_missing_file_is_empty(self, tmp_path):
        assert ConfigStore(str(tmp_path / "none")).load() == {}

    def test_save_creates_directory(self, tmp_path):
        store = ConfigStore(str(tmp_path / "home"))
        store.save({"model": "m", "api_key": None})
        assert json.loads((tmp_path / "home" / "config.json").read_text()) == {"model": "m"}

    def test_update_merges(self, tmp_path):
        store = ConfigStore(str(tmp_path))
        store.save({"model": "m"})
        assert store.update(auto_push=True, api_key=None) == {"model": "m", "auto_push": True}
        assert store.load() == {"model": "m", "auto_push": True}

    def test_invalid_json_is_ignored(self, tmp_path):
        (tmp_path / "config.json").write_text("{not json")
        assert ConfigStore(str(tmp_path)).load() == {}

    def test_non_object_is_ignored(self, tmp_path):
        (tmp_path / "config.json").write_text("[1, 2]")
        assert ConfigStore(str(tmp_path)).load() == {}


class TestGetSettings:
    def test_defaults(self, dido_home):
        s = get_settings()
        assert s.home == str(dido_home)
        assert s.api_key is None
        assert s.model == DEFAULT_MODEL
        assert s.auto_push is False
        assert set(s.skip_directories) == DEFAULT_SKIP_DIRECTORIES

    def test_environment_key(self, dido_home, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        assert get_settings().api_key == "sk-env"

    def test_prefixed_environment(self, dido_home, monkeypatch):
        monkeypatch.setenv("DIDO_AUTO_PUSH", "true")
        monkeypatch.setenv("DIDO_MODEL", "claude-test")
        s = get_settings()
        assert s.auto_push is True
        assert s.model == "claude-test"

    def test_config_file_wins_over_environment(self, dido_home, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        ConfigStore(str(dido_home)).save({"api_key": "sk-file", "auto_push": True})
        s = get_settings()
        assert s.api_key == "sk-file"
        assert s.auto_push is True

    def test_explicit_home(self, tmp_path):
        ConfigStore(str(tmp_path)).save({"model": "other"})
        assert get_settings(str(tmp_path)).model == "other"
